"""查询描述符 -> SQLAlchemy 表达式.

职责:
- 将谓词树(Comparison/Conjunction/Disjunction)翻译为 WHERE 条件
- 将排序键翻译为 ORDER BY 子句
- 统一偏移分页(总数 + LIMIT/OFFSET)
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from sqlalchemy.orm import Query
from sqlalchemy.sql.elements import ColumnElement

from bookkeeping import db
from bookkeeping.constants.entity_types import SortDirection
from bookkeeping.core.types.query import (
    Comparison,
    Conjunction,
    Disjunction,
    Operator,
    Predicate,
    SortKey,
)
from bookkeeping.models.log import Log, log_tags
from bookkeeping.models.tag import Tag
from bookkeeping.models.user import User
from bookkeeping.types.listing import PageRequest, PaginatedResult

T = TypeVar("T")

LIKE_ESCAPE = "\\"


def escape_like(value: str) -> str:
    """转义 LIKE 通配符,使用户输入按字面匹配."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


def _contains_pattern(value: Any) -> str:
    return f"%{escape_like(str(value))}%"


def _author_name_contains(comparison: Comparison) -> ColumnElement[bool]:
    return db.exists().where(
        User.id == Log.author_id,
        User.name.ilike(_contains_pattern(comparison.value), escape=LIKE_ESCAPE),
    )


def _title_contains(comparison: Comparison) -> ColumnElement[bool]:
    return Log.title.ilike(_contains_pattern(comparison.value), escape=LIKE_ESCAPE)


def _has_tag(comparison: Comparison) -> ColumnElement[bool]:
    # EXISTS 子查询,避免关联表 JOIN 造成的重复行
    return db.exists().where(log_tags.c.log_id == Log.id, log_tags.c.tag_id == comparison.value)


def _column_comparison(column: Any) -> Callable[[Comparison], ColumnElement[bool]]:
    def _build(comparison: Comparison) -> ColumnElement[bool]:
        if comparison.operator is Operator.EQ:
            return column == comparison.value
        if comparison.operator is Operator.GTE:
            return column >= comparison.value
        if comparison.operator is Operator.LTE:
            return column <= comparison.value
        raise ValueError(f"unsupported operator {comparison.operator.value} for {comparison.field}")

    return _build


_LOG_COMPARISONS: Mapping[tuple[str, Operator], Callable[[Comparison], ColumnElement[bool]]] = {
    ("author.name", Operator.ICONTAINS): _author_name_contains,
    ("title", Operator.ICONTAINS): _title_contains,
    ("tags.id", Operator.HAS): _has_tag,
    ("createdAt", Operator.GTE): _column_comparison(Log.created_at),
    ("createdAt", Operator.LTE): _column_comparison(Log.created_at),
    ("origin", Operator.EQ): _column_comparison(Log.origin),
    ("parentLogId", Operator.EQ): _column_comparison(Log.parent_log_id),
    ("rootLogId", Operator.EQ): _column_comparison(Log.root_log_id),
}


def build_log_criterion(predicate: Predicate | None) -> ColumnElement[bool] | None:
    """将谓词树翻译为日志查询的 WHERE 条件;None 表示不过滤."""
    if predicate is None:
        return None
    if isinstance(predicate, Conjunction):
        return db.and_(*(build_log_criterion(operand) for operand in predicate.operands))
    if isinstance(predicate, Disjunction):
        return db.or_(*(build_log_criterion(operand) for operand in predicate.operands))
    builder = _LOG_COMPARISONS.get((predicate.field, predicate.operator))
    if builder is None:
        raise ValueError(f"unsupported log comparison {predicate.field} {predicate.operator.value}")
    return builder(predicate)


def _author_name_sort_expression() -> Any:
    return db.select(User.name).where(User.id == Log.author_id).scalar_subquery()


def _tags_sort_expression() -> Any:
    # 按日志上字典序最小的标签文本排序
    return (
        db.select(db.func.min(Tag.text))
        .where(log_tags.c.log_id == Log.id, log_tags.c.tag_id == Tag.id)
        .scalar_subquery()
    )


LOG_SORT_EXPRESSIONS: Mapping[str, Callable[[], Any]] = {
    "id": lambda: Log.id,
    "title": lambda: Log.title,
    "createdAt": lambda: Log.created_at,
    "author": _author_name_sort_expression,
    "tags": _tags_sort_expression,
}


def build_order_by(sort: tuple[SortKey, ...], expressions: Mapping[str, Callable[[], Any]]) -> list[Any]:
    """将排序键翻译为 ORDER BY 子句(保持顺序)."""
    clauses: list[Any] = []
    for key in sort:
        factory = expressions.get(key.field)
        if factory is None:
            raise ValueError(f"unsupported sort field {key.field}")
        expression = factory()
        clauses.append(expression.desc() if key.direction == SortDirection.DESC else expression.asc())
    return clauses


def paginate_query(query: Query[T], page: PageRequest) -> PaginatedResult[T]:
    """执行偏移分页: 先统计总数(不带排序),再按 LIMIT/OFFSET 取当前页."""
    total = int(query.order_by(None).count())
    items = list(query.offset(page.offset).limit(page.limit).all())
    pages = math.ceil(total / page.limit) if total else 0
    return PaginatedResult(items=items, total=total, pages=pages, limit=page.limit, offset=page.offset)
