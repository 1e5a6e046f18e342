"""Run Repository(只读)."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

from bookkeeping import db
from bookkeeping.core.types.query import SortKey
from bookkeeping.models.run import Run
from bookkeeping.repositories.query_translation import build_order_by, paginate_query
from bookkeeping.types.listing import PageRequest, PaginatedResult

RUN_SORT_EXPRESSIONS: Mapping[str, Callable[[], Any]] = {
    "id": lambda: Run.id,
}


class RunsRepository:
    """Run 查询 Repository."""

    @staticmethod
    def list_runs(page: PageRequest, sort: tuple[SortKey, ...] = ()) -> PaginatedResult[Run]:
        query = db.session.query(Run)
        order_by = build_order_by(sort, RUN_SORT_EXPRESSIONS)
        if order_by:
            query = query.order_by(*order_by)
        return paginate_query(query, page)

    @staticmethod
    def get_run(run_id: int) -> Run | None:
        return db.session.get(Run, run_id)

    @staticmethod
    def get_runs_by_numbers(run_numbers: Iterable[int]) -> list[Run]:
        numbers = list(run_numbers)
        if not numbers:
            return []
        return list(db.session.query(Run).filter(Run.run_number.in_(numbers)).all())

    @staticmethod
    def add(run: Run) -> Run:
        db.session.add(run)
        db.session.flush()
        return run
