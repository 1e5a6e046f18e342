"""日志写操作 Service.

职责:
- 校验父日志、Run、标签引用是否存在
- 维护线程不变式: 回复继承父日志的 root_log_id, 根日志 root_log_id 回填为自身 id
- 调用 repository 执行 add/flush, 不 commit
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bookkeeping.constants.entity_types import LogOrigin, LogSubtype
from bookkeeping.constants.system_constants import ErrorMessages
from bookkeeping.core.exceptions import NotFoundError
from bookkeeping.models.attachment import Attachment
from bookkeeping.models.log import Log
from bookkeeping.repositories.logs_repository import LogsRepository
from bookkeeping.repositories.runs_repository import RunsRepository
from bookkeeping.repositories.tags_repository import TagsRepository
from bookkeeping.services.users_service import UsersService
from bookkeeping.utils.structlog_config import log_info

if TYPE_CHECKING:
    from bookkeeping.models.run import Run
    from bookkeeping.models.tag import Tag
    from bookkeeping.models.user import User
    from bookkeeping.schemas.logs import CreateLogPayload


class LogWriteService:
    """日志写操作服务."""

    def __init__(
        self,
        repository: LogsRepository | None = None,
        *,
        runs_repository: RunsRepository | None = None,
        tags_repository: TagsRepository | None = None,
        users_service: UsersService | None = None,
    ) -> None:
        self._repository = repository or LogsRepository()
        self._runs_repository = runs_repository or RunsRepository()
        self._tags_repository = tags_repository or TagsRepository()
        self._users_service = users_service or UsersService()

    def create(self, payload: CreateLogPayload, *, author: User | None = None) -> Log:
        """创建日志(人工录入、Run 子类型).

        Args:
            payload: 已校验的创建参数.
            author: 作者,缺省时使用配置的默认操作员.

        Raises:
            NotFoundError: 父日志、Run 编号或标签不存在.

        """
        parent = self._resolve_parent(payload.parent_log_id)
        runs = self._resolve_runs(payload.run_numbers)
        tags = self._resolve_tags(payload.tags)
        resolved_author = author or self._users_service.get_default_author()

        log = Log(
            title=payload.title,
            text=payload.text,
            author=resolved_author,
            origin=LogOrigin.HUMAN,
            subtype=LogSubtype.RUN,
            parent_log_id=parent.id if parent else None,
            root_log_id=parent.root_log_id if parent else None,
        )
        log.runs = runs
        log.tags = tags
        log.attachments = [
            Attachment(
                file_name=item.file_name,
                size=item.size,
                mime_type=item.mime_type,
                original_name=item.original_name,
                path=item.path,
                encoding=item.encoding,
            )
            for item in payload.attachments
        ]

        self._repository.add(log)
        if parent is None:
            log.root_log_id = log.id
            self._repository.add(log)

        log_info(
            "日志创建成功",
            module="logs",
            log_id=log.id,
            root_log_id=log.root_log_id,
            parent_log_id=log.parent_log_id,
            run_count=len(runs),
            tag_count=len(tags),
        )
        return log

    def _resolve_parent(self, parent_log_id: int | None) -> Log | None:
        if parent_log_id is None:
            return None
        parent = self._repository.get_log(parent_log_id)
        if parent is None:
            raise NotFoundError.for_entity("Log", parent_log_id)
        return parent

    def _resolve_runs(self, run_numbers: list[int]) -> list[Run]:
        runs = self._runs_repository.get_runs_by_numbers(run_numbers)
        found = {run.run_number for run in runs}
        for run_number in run_numbers:
            if run_number not in found:
                raise NotFoundError(
                    ErrorMessages.RUN_NUMBER_NOT_FOUND.format(run_number=run_number),
                    extra={"run_number": run_number},
                )
        by_number = {run.run_number: run for run in runs}
        return [by_number[number] for number in run_numbers]

    def _resolve_tags(self, tag_ids: list[int]) -> list[Tag]:
        tags = self._tags_repository.get_tags_by_ids(tag_ids)
        by_id = {tag.id: tag for tag in tags}
        for tag_id in tag_ids:
            if tag_id not in by_id:
                raise NotFoundError.for_entity("Tag", tag_id)
        return [by_id[tag_id] for tag_id in tag_ids]
