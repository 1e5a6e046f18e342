"""Run 读取 Service.

Run 列表只允许按 ``id`` 排序, 分页规则与日志列表一致.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from bookkeeping.core.exceptions import NotFoundError
from bookkeeping.core.query import RUN_SORT_FIELDS, build_pagination_meta, resolve_pagination, resolve_sort
from bookkeeping.repositories.runs_repository import RunsRepository

if TYPE_CHECKING:
    from bookkeeping.models.run import Run
    from bookkeeping.schemas.common_query import RunsListQuery
    from bookkeeping.types.listing import PaginationMeta


@dataclass(slots=True)
class RunListPage:
    runs: list[Run]
    meta: PaginationMeta


class RunReadService:
    """Run 读取服务."""

    def __init__(self, repository: RunsRepository | None = None) -> None:
        self._repository = repository or RunsRepository()

    def list_runs(self, params: RunsListQuery) -> RunListPage:
        page = resolve_pagination(
            params.page.limit if params.page else None,
            params.page.offset if params.page else None,
        )
        sort = resolve_sort(params.sort, RUN_SORT_FIELDS)
        result = self._repository.list_runs(page, sort)
        return RunListPage(runs=result.items, meta=build_pagination_meta(result.total, page.limit))

    def get_run(self, run_id: int) -> Run:
        run = self._repository.get_run(run_id)
        if run is None:
            raise NotFoundError.for_entity("Run", run_id)
        return run
