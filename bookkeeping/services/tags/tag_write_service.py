"""标签写操作 Service.

职责:
- 处理标签的创建/删除编排
- 文本唯一性校验(重复返回冲突)
- 调用 repository 执行 add/delete/flush
- 不返回 Response、不 commit
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError

from bookkeeping.constants.system_constants import ErrorMessages
from bookkeeping.core.exceptions import ConflictError, NotFoundError
from bookkeeping.models.tag import Tag
from bookkeeping.repositories.tags_repository import TagsRepository
from bookkeeping.utils.structlog_config import log_info

if TYPE_CHECKING:
    from bookkeeping.schemas.labels import CreateTagPayload


class TagWriteService:
    """标签写操作服务."""

    def __init__(self, repository: TagsRepository | None = None) -> None:
        self._repository = repository or TagsRepository()

    def create(self, payload: CreateTagPayload) -> Tag:
        """创建标签.

        Raises:
            ConflictError: 同名标签已存在.

        """
        if self._repository.get_tag_by_text(payload.text) is not None:
            raise ConflictError(ErrorMessages.ENTITY_ALREADY_EXISTS, extra={"text": payload.text})

        tag = Tag(text=payload.text)
        try:
            self._repository.add(tag)
        except IntegrityError as exc:
            raise ConflictError(ErrorMessages.ENTITY_ALREADY_EXISTS, extra={"text": payload.text}) from exc

        log_info("标签创建成功", module="tags", tag_id=tag.id, text=tag.text)
        return tag

    def delete(self, tag_id: int) -> Tag:
        """删除标签并返回被删除的实体(日志关联随之级联删除)."""
        tag = self._repository.get_tag(tag_id)
        if tag is None:
            raise NotFoundError.for_entity("Tag", tag_id)
        self._repository.delete(tag)
        log_info("标签删除成功", module="tags", tag_id=tag_id, text=tag.text)
        return tag
