"""日志详情读取 Service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from bookkeeping.core.exceptions import NotFoundError
from bookkeeping.repositories.logs_repository import LogsRepository
from bookkeeping.services.logs.log_list_service import count_replies

if TYPE_CHECKING:
    from bookkeeping.models.log import Log
    from bookkeeping.models.tag import Tag


@dataclass(slots=True)
class LogDetail:
    """单条日志 + 回复数."""

    log: Log
    replies: int


class LogDetailReadService:
    """日志详情读取服务."""

    def __init__(self, repository: LogsRepository | None = None) -> None:
        self._repository = repository or LogsRepository()

    def require_log(self, log_id: int) -> Log:
        log = self._repository.get_log(log_id)
        if log is None:
            raise NotFoundError.for_entity("Log", log_id)
        return log

    def get_log(self, log_id: int) -> LogDetail:
        log = self.require_log(log_id)
        replies = count_replies(self._repository, [log])
        return LogDetail(log=log, replies=replies.get(log.id, 0))

    def list_tags(self, log_id: int) -> list[Tag]:
        """列出日志挂载的标签."""
        return list(self.require_log(log_id).tags)
