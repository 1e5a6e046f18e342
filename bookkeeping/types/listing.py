"""列表/分页通用结构类型."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(slots=True)
class PaginatedResult(Generic[T]):
    """通用分页结果结构.

    ``limit``/``offset`` 沿用调用方的偏移分页语义, ``pages`` 为按 ``limit`` 计算的总页数.
    """

    items: list[T]
    total: int
    pages: int
    limit: int
    offset: int = 0


@dataclass(frozen=True, slots=True)
class PageRequest:
    """已校验的分页请求(偏移分页)."""

    limit: int
    offset: int


@dataclass(frozen=True, slots=True)
class PaginationMeta:
    """分页元信息,序列化为 ``meta.page``."""

    page_count: int
    total_count: int

    def to_dict(self) -> dict[str, int]:
        """转换为对外 camelCase 结构."""
        return {"pageCount": self.page_count, "totalCount": self.total_count}
