"""统一时间处理工具模块.

存储层统一使用 UTC, 对外接口使用 Unix 毫秒时间戳.
"""

from __future__ import annotations

from datetime import UTC, datetime


class TimeUtils:
    """统一时间处理工具类."""

    @staticmethod
    def now() -> datetime:
        """获取当前 UTC 时间."""
        return datetime.now(UTC)

    @staticmethod
    def to_utc(dt: datetime | None) -> datetime | None:
        """将时间转换为 UTC 时区.

        无时区信息的时间视为 UTC(SQLite 等后端读出的值不带时区).
        """
        if dt is None:
            return None
        if dt.tzinfo is None:
            return dt.replace(tzinfo=UTC)
        return dt.astimezone(UTC)

    @staticmethod
    def to_unix_ms(dt: datetime | None) -> int | None:
        """转换为 Unix 毫秒时间戳."""
        utc_value = TimeUtils.to_utc(dt)
        if utc_value is None:
            return None
        return int(utc_value.timestamp() * 1000)

    @staticmethod
    def from_unix_ms(value: int | None) -> datetime | None:
        """从 Unix 毫秒时间戳构造 UTC 时间."""
        if value is None:
            return None
        return datetime.fromtimestamp(value / 1000, tz=UTC)


time_utils = TimeUtils()
