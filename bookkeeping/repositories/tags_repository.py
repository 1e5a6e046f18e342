"""标签 Repository.

职责:
- 仅负责 Query 组装与数据库读写
- 不做序列化、不返回 Response、不 commit
"""

from __future__ import annotations

from collections.abc import Iterable

from bookkeeping import db
from bookkeeping.models.tag import Tag
from bookkeeping.repositories.query_translation import paginate_query
from bookkeeping.types.listing import PageRequest, PaginatedResult


class TagsRepository:
    """标签查询 Repository."""

    @staticmethod
    def list_tags(page: PageRequest) -> PaginatedResult[Tag]:
        return paginate_query(db.session.query(Tag).order_by(Tag.id.asc()), page)

    @staticmethod
    def get_tag(tag_id: int) -> Tag | None:
        return db.session.get(Tag, tag_id)

    @staticmethod
    def get_tag_by_text(text: str) -> Tag | None:
        return db.session.query(Tag).filter(Tag.text == text).one_or_none()

    @staticmethod
    def get_tags_by_ids(tag_ids: Iterable[int]) -> list[Tag]:
        ids = list(tag_ids)
        if not ids:
            return []
        return list(db.session.query(Tag).filter(Tag.id.in_(ids)).all())

    @staticmethod
    def add(tag: Tag) -> Tag:
        db.session.add(tag)
        db.session.flush()
        return tag

    @staticmethod
    def delete(tag: Tag) -> None:
        db.session.delete(tag)
        db.session.flush()
