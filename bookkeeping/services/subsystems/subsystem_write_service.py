"""子系统写操作 Service(创建/删除,不 commit)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError

from bookkeeping.constants.system_constants import ErrorMessages
from bookkeeping.core.exceptions import ConflictError, NotFoundError
from bookkeeping.models.subsystem import Subsystem
from bookkeeping.repositories.subsystems_repository import SubsystemsRepository
from bookkeeping.utils.structlog_config import log_info

if TYPE_CHECKING:
    from bookkeeping.schemas.labels import CreateSubsystemPayload


class SubsystemWriteService:
    """子系统写操作服务."""

    def __init__(self, repository: SubsystemsRepository | None = None) -> None:
        self._repository = repository or SubsystemsRepository()

    def create(self, payload: CreateSubsystemPayload) -> Subsystem:
        if self._repository.get_subsystem_by_name(payload.text) is not None:
            raise ConflictError(ErrorMessages.ENTITY_ALREADY_EXISTS, extra={"name": payload.text})

        subsystem = Subsystem(name=payload.text)
        try:
            self._repository.add(subsystem)
        except IntegrityError as exc:
            raise ConflictError(ErrorMessages.ENTITY_ALREADY_EXISTS, extra={"name": payload.text}) from exc

        log_info("子系统创建成功", module="subsystems", subsystem_id=subsystem.id, name=subsystem.name)
        return subsystem

    def delete(self, subsystem_id: int) -> Subsystem:
        subsystem = self._repository.get_subsystem(subsystem_id)
        if subsystem is None:
            raise NotFoundError.for_entity("Subsystem", subsystem_id)
        self._repository.delete(subsystem)
        log_info("子系统删除成功", module="subsystems", subsystem_id=subsystem_id)
        return subsystem
