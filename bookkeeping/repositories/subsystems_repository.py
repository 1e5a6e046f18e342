"""子系统 Repository(不 commit)."""

from __future__ import annotations

from bookkeeping import db
from bookkeeping.models.subsystem import Subsystem
from bookkeeping.repositories.query_translation import paginate_query
from bookkeeping.types.listing import PageRequest, PaginatedResult


class SubsystemsRepository:
    """子系统查询 Repository."""

    @staticmethod
    def list_subsystems(page: PageRequest) -> PaginatedResult[Subsystem]:
        return paginate_query(db.session.query(Subsystem).order_by(Subsystem.id.asc()), page)

    @staticmethod
    def get_subsystem(subsystem_id: int) -> Subsystem | None:
        return db.session.get(Subsystem, subsystem_id)

    @staticmethod
    def get_subsystem_by_name(name: str) -> Subsystem | None:
        return db.session.query(Subsystem).filter(Subsystem.name == name).one_or_none()

    @staticmethod
    def add(subsystem: Subsystem) -> Subsystem:
        db.session.add(subsystem)
        db.session.flush()
        return subsystem

    @staticmethod
    def delete(subsystem: Subsystem) -> None:
        db.session.delete(subsystem)
        db.session.flush()
