"""Bookkeeping - 统一异常定义(Shared Kernel).

说明:
- 本模块只负责定义异常类型与语义字段,不包含 HTTP/Flask/Werkzeug 等框架细节.
- 异常到 HTTP status 的映射应在 API/HTTP 边界完成(见 `bookkeeping/api/error_mapping.py`).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from bookkeeping.constants.system_constants import ErrorCategory, ErrorMessages, ErrorSeverity

if TYPE_CHECKING:
    from bookkeeping.types.structures import LoggerExtra


@dataclass(frozen=True, slots=True)
class ExceptionMetadata:
    """异常的元信息(不包含传输层信息)."""

    category: ErrorCategory
    severity: ErrorSeverity
    default_message_key: str


class AppError(Exception):
    """统一的基础业务异常.

    Args:
        message: 自定义错误文案,若为空则根据 ``message_key`` 推导.
        message_key: 自定义消息键.
        extra: 结构化日志附加字段.
        severity: 错误严重度.
        category: 错误分类.
    """

    metadata = ExceptionMetadata(
        category=ErrorCategory.SYSTEM,
        severity=ErrorSeverity.HIGH,
        default_message_key="INTERNAL_ERROR",
    )

    def __init__(
        self,
        message: str | None = None,
        *,
        message_key: str | None = None,
        extra: LoggerExtra | None = None,
        severity: ErrorSeverity | None = None,
        category: ErrorCategory | None = None,
    ) -> None:
        """初始化基础业务异常."""
        self.message_key = message_key or self.metadata.default_message_key
        self.message = message or getattr(ErrorMessages, self.message_key, ErrorMessages.INTERNAL_ERROR)
        self.extra = dict(extra or {})
        self.severity = severity or self.metadata.severity
        self.category = category or self.metadata.category
        super().__init__(self.message)

    @property
    def recoverable(self) -> bool:
        """表示该异常是否可恢复."""
        return self.severity in (ErrorSeverity.LOW, ErrorSeverity.MEDIUM)


class ValidationError(AppError):
    """表示输入参数或请求体验证失败.

    ``field`` 为点分隔的字段路径(如 ``query.page.limit``),
    在 HTTP 边界会被转换为 JSON pointer(``/data/attributes/query/page/limit``).
    """

    metadata = ExceptionMetadata(
        category=ErrorCategory.VALIDATION,
        severity=ErrorSeverity.LOW,
        default_message_key="VALIDATION_ERROR",
    )

    def __init__(
        self,
        message: str | None = None,
        *,
        field: str | None = None,
        message_key: str | None = None,
        extra: LoggerExtra | None = None,
    ) -> None:
        """初始化校验异常,可选携带出错字段路径."""
        self.field = field
        merged_extra = dict(extra or {})
        if field:
            merged_extra.setdefault("field", field)
        super().__init__(message, message_key=message_key, extra=merged_extra)

    @property
    def pointer(self) -> str | None:
        """返回出错字段对应的 JSON pointer."""
        if not self.field:
            return None
        return "/data/attributes/" + "/".join(self.field.split("."))


class NotFoundError(AppError):
    """表示客户端请求的资源不存在或被删除."""

    metadata = ExceptionMetadata(
        category=ErrorCategory.BUSINESS,
        severity=ErrorSeverity.LOW,
        default_message_key="RESOURCE_NOT_FOUND",
    )

    @classmethod
    def for_entity(cls, entity: str, entity_id: int | str) -> NotFoundError:
        """按实体名与 id 构造统一文案的 404 异常."""
        return cls(
            ErrorMessages.ENTITY_NOT_FOUND.format(entity=entity, entity_id=entity_id),
            extra={"entity": entity, "entity_id": entity_id},
        )


class ConflictError(AppError):
    """表示资源状态冲突或违反唯一性约束."""

    metadata = ExceptionMetadata(
        category=ErrorCategory.BUSINESS,
        severity=ErrorSeverity.MEDIUM,
        default_message_key="CONSTRAINT_VIOLATION",
    )


class DataIntegrityError(AppError):
    """表示已持久化的数据违反结构不变式(如日志线程成环、父日志缺失)."""

    metadata = ExceptionMetadata(
        category=ErrorCategory.DATA_INTEGRITY,
        severity=ErrorSeverity.CRITICAL,
        default_message_key="DATA_INTEGRITY_VIOLATION",
    )


class DatabaseError(AppError):
    """表示数据库查询或事务执行失败."""

    metadata = ExceptionMetadata(
        category=ErrorCategory.DATABASE,
        severity=ErrorSeverity.HIGH,
        default_message_key="INTERNAL_ERROR",
    )


class SystemError(AppError):
    """表示系统级未知错误或底层故障."""


__all__ = [
    "AppError",
    "ConflictError",
    "DataIntegrityError",
    "DatabaseError",
    "NotFoundError",
    "SystemError",
    "ValidationError",
]
