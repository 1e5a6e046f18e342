"""子系统读取 Service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from bookkeeping.core.exceptions import NotFoundError
from bookkeeping.core.query import build_pagination_meta, resolve_pagination
from bookkeeping.repositories.subsystems_repository import SubsystemsRepository

if TYPE_CHECKING:
    from bookkeeping.models.subsystem import Subsystem
    from bookkeeping.schemas.common_query import PaginatedListQuery
    from bookkeeping.types.listing import PaginationMeta


@dataclass(slots=True)
class SubsystemListPage:
    subsystems: list[Subsystem]
    meta: PaginationMeta


class SubsystemReadService:
    """子系统读取服务."""

    def __init__(self, repository: SubsystemsRepository | None = None) -> None:
        self._repository = repository or SubsystemsRepository()

    def list_subsystems(self, params: PaginatedListQuery) -> SubsystemListPage:
        page = resolve_pagination(
            params.page.limit if params.page else None,
            params.page.offset if params.page else None,
        )
        result = self._repository.list_subsystems(page)
        return SubsystemListPage(subsystems=result.items, meta=build_pagination_meta(result.total, page.limit))

    def get_subsystem(self, subsystem_id: int) -> Subsystem:
        subsystem = self._repository.get_subsystem(subsystem_id)
        if subsystem is None:
            raise NotFoundError.for_entity("Subsystem", subsystem_id)
        return subsystem
