"""Query 参数解析 helper.

说明:
- 这些函数只做"类型转换 + 去空白 + 默认值"的稳定 canonicalization.
- 抛出的 ValueError 文案不含字段名,由 `validate_or_raise` 统一拼接字段路径.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any

from bookkeeping.utils.time_utils import time_utils

_CSV_IDS_PATTERN = re.compile(r"^([1-9]\d*,)*[1-9]\d*$")


def parse_optional_int(value: Any) -> int | None:
    """Parse optional int (strip strings; blank -> None; reject bool)."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError("must be a number")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        try:
            return int(stripped, 10)
        except ValueError as exc:
            raise ValueError("must be a number") from exc
    raise ValueError("must be a number")


def parse_optional_text(value: Any) -> str | None:
    """Parse text as stripped string; None/blank -> None."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError("must be a string")
    cleaned = value.strip()
    return cleaned or None


def parse_id_csv(value: Any) -> list[int]:
    """Parse CSV entity ids (``"1,2,3"``) into a list, keeping order and duplicates."""
    if value is None:
        return []
    if isinstance(value, list):
        parts = [str(item).strip() for item in value]
        value = ",".join(part for part in parts if part)
    if not isinstance(value, str):
        raise ValueError("must be a comma separated list of ids")
    cleaned = value.replace(" ", "")
    if not cleaned:
        return []
    if not _CSV_IDS_PATTERN.match(cleaned):
        raise ValueError("must be a comma separated list of ids")
    return [int(part, 10) for part in cleaned.split(",")]


def parse_optional_unix_ms(value: Any) -> datetime | None:
    """Parse a Unix millisecond timestamp into an aware UTC datetime."""
    parsed = parse_optional_int(value)
    if parsed is None:
        return None
    if parsed < 0:
        raise ValueError("must be greater than or equal to 0")
    try:
        return time_utils.from_unix_ms(parsed)
    except (OverflowError, OSError, ValueError) as exc:
        # 超出 datetime 可表示范围
        raise ValueError("must be a valid timestamp") from exc
