"""日志相关核心类型."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, Protocol, TypeVar


@dataclass(frozen=True, slots=True)
class LogFilterCriteria:
    """日志列表筛选条件(已完成类型转换,尚未做语义校验).

    ``tag_values`` 保持调用方给出的顺序,可能包含重复值.
    """

    author: str | None = None
    title: str | None = None
    created_from: datetime | None = None
    created_to: datetime | None = None
    tag_values: tuple[int, ...] = ()
    tag_operation: str | None = None
    origin: str | None = None
    parent_log: int | None = None
    root_log: int | None = None


class SupportsThreadLink(Protocol):
    """日志线程中的最小结构(id + 父子关系 + 创建时间)."""

    @property
    def id(self) -> int: ...

    @property
    def parent_log_id(self) -> int | None: ...

    @property
    def root_log_id(self) -> int: ...

    @property
    def created_at(self) -> datetime: ...


@dataclass(frozen=True, slots=True)
class ThreadLink:
    """Repository 投影出的线程行(不含正文等大字段)."""

    id: int
    parent_log_id: int | None
    root_log_id: int
    created_at: datetime


LogT = TypeVar("LogT", bound=SupportsThreadLink)


@dataclass(frozen=True, slots=True)
class LogTreeNode(Generic[LogT]):
    """日志树节点: 自身日志记录 + 有序子节点(叶子节点为空元组).

    ``descendants`` 为全部后代数量,由组装时一次性计算.
    """

    log: LogT
    children: tuple[LogTreeNode[LogT], ...] = field(default_factory=tuple)
    descendants: int = 0
