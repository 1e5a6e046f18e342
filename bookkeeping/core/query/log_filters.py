"""日志筛选编译器.

将 ``LogFilterCriteria`` 编译为不可变的谓词树(``Comparison``/``Conjunction``/``Disjunction``),
所有存在的子筛选以 AND 组合. 编译器只构造描述符,不访问存储.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from bookkeeping.constants.entity_types import LogOrigin
from bookkeeping.constants.validation_limits import (
    ENTITY_ID_MIN,
    LOG_TITLE_MAX_LENGTH,
    LOG_TITLE_MIN_LENGTH,
)
from bookkeeping.core.exceptions import ValidationError
from bookkeeping.core.query.pagination import resolve_pagination
from bookkeeping.core.query.sorting import LOG_SORT_FIELDS, resolve_sort
from bookkeeping.core.types.logs import LogFilterCriteria
from bookkeeping.core.types.query import (
    Comparison,
    Conjunction,
    Disjunction,
    LogListQuery,
    Operator,
    Predicate,
)
from bookkeeping.types.listing import PageRequest

FILTER_SCOPE = "query.filter"

TAG_OPERATION_AND = "and"
TAG_OPERATION_OR = "or"
TAG_OPERATIONS = (TAG_OPERATION_AND, TAG_OPERATION_OR)


def _normalize_text(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


def _compile_author(author: str | None) -> Predicate | None:
    text = _normalize_text(author)
    if text is None:
        return None
    return Comparison("author.name", Operator.ICONTAINS, text)


def _compile_title(title: str | None) -> Predicate | None:
    text = _normalize_text(title)
    if text is None:
        return None
    if not LOG_TITLE_MIN_LENGTH <= len(text) <= LOG_TITLE_MAX_LENGTH:
        field_path = f"{FILTER_SCOPE}.title"
        raise ValidationError(
            f'"{field_path}" length must be between {LOG_TITLE_MIN_LENGTH} and {LOG_TITLE_MAX_LENGTH} characters',
            field=field_path,
        )
    return Comparison("title", Operator.ICONTAINS, text)


def _compile_created(criteria: LogFilterCriteria) -> list[Predicate]:
    created_from = criteria.created_from
    created_to = criteria.created_to
    if created_from is not None and created_to is not None and created_to < created_from:
        field_path = f"{FILTER_SCOPE}.created.to"
        raise ValidationError(
            f'"{field_path}" must be greater than or equal to "{FILTER_SCOPE}.created.from"',
            field=field_path,
        )
    predicates: list[Predicate] = []
    if created_from is not None:
        predicates.append(Comparison("createdAt", Operator.GTE, created_from))
    if created_to is not None:
        predicates.append(Comparison("createdAt", Operator.LTE, created_to))
    return predicates


def _dedupe_ids(values: Iterable[int]) -> tuple[int, ...]:
    seen: dict[int, None] = {}
    for value in values:
        seen.setdefault(value, None)
    return tuple(seen)


def _compile_tags(values: tuple[int, ...], operation: str | None) -> Predicate | None:
    tag_ids = _dedupe_ids(values)
    # 没有标签 id 时忽略 operation
    if not tag_ids:
        return None

    for tag_id in tag_ids:
        _require_entity_id(tag_id, f"{FILTER_SCOPE}.tag.values")

    normalized = (operation or "").strip().lower()
    if normalized not in TAG_OPERATIONS:
        field_path = f"{FILTER_SCOPE}.tag.operation"
        raise ValidationError(f'"{field_path}" must be one of [and, or]', field=field_path)

    comparisons = tuple(Comparison("tags.id", Operator.HAS, tag_id) for tag_id in tag_ids)
    if len(comparisons) == 1:
        return comparisons[0]
    if normalized == TAG_OPERATION_AND:
        return Conjunction(comparisons)
    return Disjunction(comparisons)


def _compile_origin(origin: str | None) -> Predicate | None:
    if origin is None:
        return None
    if origin not in LogOrigin.ALL:
        field_path = f"{FILTER_SCOPE}.origin"
        raise ValidationError(f'"{field_path}" must be one of [human, process]', field=field_path)
    return Comparison("origin", Operator.EQ, origin)


def _require_entity_id(value: int, field_path: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < ENTITY_ID_MIN:
        raise ValidationError(f'"{field_path}" must be a positive integer', field=field_path)
    return value


def _compile_reference(value: int | None, field: str, name: str) -> Predicate | None:
    if value is None:
        return None
    return Comparison(field, Operator.EQ, _require_entity_id(value, f"{FILTER_SCOPE}.{name}"))


def compile_log_filter(criteria: LogFilterCriteria | None) -> Predicate | None:
    """编译日志筛选条件.

    Args:
        criteria: 已类型转换的筛选条件,为空表示不筛选.

    Returns:
        Predicate | None: 谓词树;没有任何子筛选时返回 None(匹配全部日志).

    Raises:
        ValidationError: 子筛选取值非法(长度、枚举、id、时间区间倒置)时抛出.

    """
    if criteria is None:
        return None

    predicates: list[Predicate] = []
    for predicate in (_compile_author(criteria.author), _compile_title(criteria.title)):
        if predicate is not None:
            predicates.append(predicate)
    predicates.extend(_compile_created(criteria))
    for predicate in (
        _compile_tags(criteria.tag_values, criteria.tag_operation),
        _compile_origin(criteria.origin),
        _compile_reference(criteria.parent_log, "parentLogId", "parentLog"),
        _compile_reference(criteria.root_log, "rootLogId", "rootLog"),
    ):
        if predicate is not None:
            predicates.append(predicate)

    if not predicates:
        return None
    if len(predicates) == 1:
        return predicates[0]
    return Conjunction(tuple(predicates))


def compile_log_query(
    criteria: LogFilterCriteria | None,
    sort_mapping: Mapping[str, str] | None = None,
    page: PageRequest | None = None,
) -> LogListQuery:
    """组合筛选、排序与分页,生成日志列表查询描述符.

    全部校验在返回前完成,任一失败都不会产生部分描述符.
    """
    predicate = compile_log_filter(criteria)
    sort = resolve_sort(sort_mapping, LOG_SORT_FIELDS)
    resolved_page = page if page is not None else resolve_pagination()
    return LogListQuery(predicate=predicate, page=resolved_page, sort=sort)
