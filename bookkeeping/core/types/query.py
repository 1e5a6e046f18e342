"""列表查询描述符类型.

筛选编译器输出的谓词树与排序键均为不可变的纯数据,
由 Repository 层翻译成实际的存储查询.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TypeAlias

from bookkeeping.types.listing import PageRequest


class Operator(str, Enum):
    """比较运算符."""

    EQ = "eq"
    ICONTAINS = "icontains"
    GTE = "gte"
    LTE = "lte"
    HAS = "has"


ComparisonValue: TypeAlias = int | str | datetime


@dataclass(frozen=True, slots=True)
class Comparison:
    """单字段比较,例如 ``Comparison("title", Operator.ICONTAINS, "beam")``."""

    field: str
    operator: Operator
    value: ComparisonValue


@dataclass(frozen=True, slots=True)
class Conjunction:
    """全部子谓词同时成立(AND)."""

    operands: tuple[Predicate, ...]


@dataclass(frozen=True, slots=True)
class Disjunction:
    """任一子谓词成立(OR)."""

    operands: tuple[Predicate, ...]


Predicate: TypeAlias = Comparison | Conjunction | Disjunction


@dataclass(frozen=True, slots=True)
class SortKey:
    """排序键,``field`` 为对外字段名(如 ``createdAt``)."""

    field: str
    direction: str


@dataclass(frozen=True, slots=True)
class LogListQuery:
    """日志列表查询描述符: 谓词 + 排序 + 分页."""

    predicate: Predicate | None
    page: PageRequest
    sort: tuple[SortKey, ...] = field(default_factory=tuple)
