"""日志列表 Service.

职责:
- 将 query schema 转换为查询描述符(分页/筛选/排序全部校验通过后才访问存储)
- 调用 repository 获取当前页与总数
- 统计每条日志的回复数(后代数量)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from bookkeeping.core.log_tree import count_descendants
from bookkeeping.core.query import build_pagination_meta, compile_log_query, resolve_pagination
from bookkeeping.repositories.logs_repository import LogsRepository
from bookkeeping.utils.structlog_config import log_debug

if TYPE_CHECKING:
    from collections.abc import Sequence

    from bookkeeping.models.log import Log
    from bookkeeping.schemas.logs_query import LogsListQuery
    from bookkeeping.types.listing import PaginationMeta


@dataclass(slots=True)
class LogListPage:
    """日志列表结果."""

    logs: list[Log]
    replies: dict[int, int]
    meta: PaginationMeta


def count_replies(repository: LogsRepository, logs: Sequence[Log]) -> dict[int, int]:
    """按线程批量统计日志的后代数量."""
    root_ids = {log.root_log_id for log in logs if log.root_log_id is not None}
    links = repository.list_thread_links(root_ids)
    counts = count_descendants(links)
    return {log.id: counts.get(log.id, 0) for log in logs}


class LogListService:
    """日志列表读取服务."""

    def __init__(self, repository: LogsRepository | None = None) -> None:
        self._repository = repository or LogsRepository()

    def list_logs(self, params: LogsListQuery) -> LogListPage:
        """分页查询日志.

        Raises:
            ValidationError: 分页越界、筛选值非法、排序字段不在白名单时抛出,
                此时不会执行任何查询.

        """
        page_params = params.page
        page = resolve_pagination(
            page_params.limit if page_params else None,
            page_params.offset if page_params else None,
        )
        query = compile_log_query(params.to_criteria(), params.sort, page)
        log_debug("日志列表查询描述符", module="logs", predicate=repr(query.predicate), sort=repr(query.sort))

        result = self._repository.list_logs(query)
        return LogListPage(
            logs=result.items,
            replies=count_replies(self._repository, result.items),
            meta=build_pagination_meta(result.total, page.limit),
        )
