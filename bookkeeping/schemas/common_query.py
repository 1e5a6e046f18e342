"""通用列表 query schema(分页/排序)."""

from __future__ import annotations

from typing import Any

from pydantic import field_validator

from bookkeeping.schemas.base import QuerySchema
from bookkeeping.schemas.query_parsers import parse_optional_int


class PageQuery(QuerySchema):
    """``page[limit]`` / ``page[offset]``.

    这里只做类型转换; 取值范围由 `resolve_pagination` 校验.
    """

    limit: int | None = None
    offset: int | None = None

    @field_validator("limit", "offset", mode="before")
    @classmethod
    def _parse_int(cls, value: Any) -> int | None:
        return parse_optional_int(value)


def parse_sort_mapping(value: Any) -> dict[str, str] | None:
    """``sort[field]=direction`` -> 有序 dict; 方向与字段合法性由 `resolve_sort` 校验."""
    if value is None:
        return None
    if not isinstance(value, dict):
        raise ValueError("must be of type object")
    mapping: dict[str, str] = {}
    for key, direction in value.items():
        if not isinstance(direction, str):
            raise ValueError("must be one of [asc, desc]")
        mapping[str(key)] = direction
    return mapping


class PaginatedListQuery(QuerySchema):
    """只支持分页参数的列表 query(标签、子系统)."""

    page: PageQuery | None = None


class RunsListQuery(QuerySchema):
    """Run 列表 query: 分页 + ``sort[id]``."""

    page: PageQuery | None = None
    sort: dict[str, str] | None = None

    @field_validator("sort", mode="before")
    @classmethod
    def _parse_sort(cls, value: Any) -> dict[str, str] | None:
        return parse_sort_mapping(value)
