"""排序解析: 将有序的 field->direction 映射转换为排序键序列."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Final

from bookkeeping.constants.entity_types import SortDirection
from bookkeeping.core.exceptions import ValidationError
from bookkeeping.core.types.query import SortKey

LOG_SORT_FIELDS: Final[frozenset[str]] = frozenset({"id", "title", "author", "createdAt", "tags"})
RUN_SORT_FIELDS: Final[frozenset[str]] = frozenset({"id"})


def resolve_sort(
    mapping: Mapping[str, str] | None,
    allowed_fields: frozenset[str],
    *,
    scope: str = "query.sort",
) -> tuple[SortKey, ...]:
    """解析排序参数.

    映射的迭代顺序即排序优先级: 第一个字段为主排序键,其余依次作为次级键.
    空映射表示不排序.

    Args:
        mapping: 字段到方向(``asc``/``desc``)的有序映射.
        allowed_fields: 该实体允许排序的字段白名单.
        scope: 错误字段路径前缀.

    Returns:
        tuple[SortKey, ...]: 有序排序键.

    Raises:
        ValidationError: 字段不在白名单或方向非法时抛出.

    """
    if not mapping:
        return ()

    keys: list[SortKey] = []
    for field_name, raw_direction in mapping.items():
        field_path = f"{scope}.{field_name}"
        if field_name not in allowed_fields:
            raise ValidationError(f'"{field_path}" is not allowed', field=field_path)
        direction = str(raw_direction or "").strip().lower()
        if direction not in SortDirection.ALL:
            raise ValidationError(f'"{field_path}" must be one of [asc, desc]', field=field_path)
        keys.append(SortKey(field=field_name, direction=direction))
    return tuple(keys)
