"""日志列表 query/filter schema.

目标:
- 将 ``page[...]`` / ``filter[...]`` / ``sort[...]`` 的类型转换下沉到 schema 单入口.
- 语义校验(区间、枚举、白名单)由 `core.query` 完成,schema 只负责形状与类型.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from bookkeeping.core.types.logs import LogFilterCriteria
from bookkeeping.schemas.base import QuerySchema
from bookkeeping.schemas.common_query import PageQuery, parse_sort_mapping
from bookkeeping.schemas.query_parsers import (
    parse_id_csv,
    parse_optional_int,
    parse_optional_text,
    parse_optional_unix_ms,
)


class CreatedFilterQuery(QuerySchema):
    """``filter[created][from|to]``,Unix 毫秒时间戳."""

    from_: datetime | None = Field(default=None, alias="from")
    to: datetime | None = None

    @field_validator("from_", "to", mode="before")
    @classmethod
    def _parse_timestamp(cls, value: Any) -> datetime | None:
        return parse_optional_unix_ms(value)


class TagFilterQuery(QuerySchema):
    """``filter[tag][operation]`` + ``filter[tag][values]``(逗号分隔的 id)."""

    operation: str | None = None
    values: list[int] = Field(default_factory=list)

    @field_validator("operation", mode="before")
    @classmethod
    def _parse_operation(cls, value: Any) -> str | None:
        return parse_optional_text(value)

    @field_validator("values", mode="before")
    @classmethod
    def _parse_values(cls, value: Any) -> list[int]:
        return parse_id_csv(value)


class LogFilterQuery(QuerySchema):
    """``filter[...]``."""

    author: str | None = None
    title: str | None = None
    created: CreatedFilterQuery | None = None
    origin: str | None = None
    parent_log: int | None = Field(default=None, alias="parentLog")
    root_log: int | None = Field(default=None, alias="rootLog")
    tag: TagFilterQuery | None = None

    @field_validator("author", "title", "origin", mode="before")
    @classmethod
    def _parse_text(cls, value: Any) -> str | None:
        return parse_optional_text(value)

    @field_validator("parent_log", "root_log", mode="before")
    @classmethod
    def _parse_reference(cls, value: Any) -> int | None:
        return parse_optional_int(value)


class LogsListQuery(QuerySchema):
    """日志列表 query 参数 schema."""

    page: PageQuery | None = None
    filter: LogFilterQuery | None = None
    sort: dict[str, str] | None = None

    @field_validator("sort", mode="before")
    @classmethod
    def _parse_sort(cls, value: Any) -> dict[str, str] | None:
        return parse_sort_mapping(value)

    def to_criteria(self) -> LogFilterCriteria | None:
        """转换为筛选编译器的输入."""
        if self.filter is None:
            return None
        created = self.filter.created
        tag = self.filter.tag
        return LogFilterCriteria(
            author=self.filter.author,
            title=self.filter.title,
            created_from=created.from_ if created else None,
            created_to=created.to if created else None,
            tag_values=tuple(tag.values) if tag else (),
            tag_operation=tag.operation if tag else None,
            origin=self.filter.origin,
            parent_log=self.filter.parent_log,
            root_log=self.filter.root_log,
        )
