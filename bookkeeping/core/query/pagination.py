"""分页解析: 校验 limit/offset 并计算分页元信息."""

from __future__ import annotations

import math

from bookkeeping.constants.validation_limits import (
    PAGINATION_LIMIT_DEFAULT,
    PAGINATION_LIMIT_MAX,
    PAGINATION_LIMIT_MIN,
    PAGINATION_OFFSET_DEFAULT,
    PAGINATION_OFFSET_MAX,
    PAGINATION_OFFSET_MIN,
)
from bookkeeping.core.exceptions import ValidationError
from bookkeeping.types.listing import PageRequest, PaginationMeta

LIMIT_FIELD = "query.page.limit"
OFFSET_FIELD = "query.page.offset"


def resolve_pagination(limit: int | None = None, offset: int | None = None) -> PageRequest:
    """将 ``{limit, offset}`` 解析为有界的分页请求.

    Args:
        limit: 每页条数,缺省为 100,范围 [1, 100].
        offset: 偏移量,缺省为 0,范围 [0, 2**63 - 1].

    Returns:
        PageRequest: 已校验的分页请求.

    Raises:
        ValidationError: limit 或 offset 越界时抛出,文案指明出错字段.

    """
    resolved_limit = PAGINATION_LIMIT_DEFAULT if limit is None else limit
    resolved_offset = PAGINATION_OFFSET_DEFAULT if offset is None else offset

    if resolved_limit > PAGINATION_LIMIT_MAX:
        raise ValidationError(
            f'"{LIMIT_FIELD}" must be less than or equal to {PAGINATION_LIMIT_MAX}',
            field=LIMIT_FIELD,
        )
    if resolved_limit < PAGINATION_LIMIT_MIN:
        raise ValidationError(
            f'"{LIMIT_FIELD}" must be greater than or equal to {PAGINATION_LIMIT_MIN}',
            field=LIMIT_FIELD,
        )
    if resolved_offset < PAGINATION_OFFSET_MIN:
        raise ValidationError(
            f'"{OFFSET_FIELD}" must be greater than or equal to {PAGINATION_OFFSET_MIN}',
            field=OFFSET_FIELD,
        )
    if resolved_offset > PAGINATION_OFFSET_MAX:
        raise ValidationError(
            f'"{OFFSET_FIELD}" must be less than or equal to {PAGINATION_OFFSET_MAX}',
            field=OFFSET_FIELD,
        )
    return PageRequest(limit=resolved_limit, offset=resolved_offset)


def build_pagination_meta(total_count: int, limit: int) -> PaginationMeta:
    """根据总数与每页条数计算 ``{pageCount, totalCount}``."""
    page_count = math.ceil(total_count / limit) if total_count > 0 else 0
    return PaginationMeta(page_count=page_count, total_count=total_count)
