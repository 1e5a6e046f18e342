"""标签读取 Service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from bookkeeping.core.exceptions import NotFoundError
from bookkeeping.core.query import build_pagination_meta, resolve_pagination
from bookkeeping.repositories.logs_repository import LogsRepository
from bookkeeping.repositories.tags_repository import TagsRepository
from bookkeeping.services.logs.log_list_service import count_replies

if TYPE_CHECKING:
    from bookkeeping.models.log import Log
    from bookkeeping.models.tag import Tag
    from bookkeeping.schemas.common_query import PaginatedListQuery
    from bookkeeping.types.listing import PaginationMeta


@dataclass(slots=True)
class TagListPage:
    """标签列表结果."""

    tags: list[Tag]
    meta: PaginationMeta


@dataclass(slots=True)
class TaggedLogs:
    """某标签下的日志及其回复数."""

    logs: list[Log]
    replies: dict[int, int]


class TagReadService:
    """标签读取服务."""

    def __init__(
        self,
        repository: TagsRepository | None = None,
        *,
        logs_repository: LogsRepository | None = None,
    ) -> None:
        self._repository = repository or TagsRepository()
        self._logs_repository = logs_repository or LogsRepository()

    def list_tags(self, params: PaginatedListQuery) -> TagListPage:
        page = resolve_pagination(
            params.page.limit if params.page else None,
            params.page.offset if params.page else None,
        )
        result = self._repository.list_tags(page)
        return TagListPage(tags=result.items, meta=build_pagination_meta(result.total, page.limit))

    def get_tag(self, tag_id: int) -> Tag:
        tag = self._repository.get_tag(tag_id)
        if tag is None:
            raise NotFoundError.for_entity("Tag", tag_id)
        return tag

    def list_logs(self, tag_id: int) -> TaggedLogs:
        """列出挂载了该标签的日志(按 id 升序)."""
        self.get_tag(tag_id)
        logs = self._logs_repository.list_logs_by_tag(tag_id)
        return TaggedLogs(logs=logs, replies=count_replies(self._logs_repository, logs))
