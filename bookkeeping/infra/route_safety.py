"""事务边界安全执行与结构化日志助手.

提供 `log_with_context` 与 `safe_route_call` 两个 helper,用于复用结构化日志字段,
并集中处理视图层的异常捕获与提交/回滚.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Literal, TypedDict, TypeVar, Unpack, cast

from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from bookkeeping import db
from bookkeeping.constants.system_constants import ErrorSeverity
from bookkeeping.core.exceptions import AppError, DatabaseError, SystemError, ValidationError
from bookkeeping.utils.structlog_config import get_logger

if TYPE_CHECKING:
    from bookkeeping.types.structures import JsonDict, JsonValue, LoggerExtra

R = TypeVar("R")
LogLevel = Literal["debug", "info", "warning", "error", "critical"]
DEFAULT_EXPECTED_EXCEPTIONS: tuple[type[BaseException], ...] = (AppError, HTTPException)


class LogContextOptions(TypedDict, total=False):
    """结构化日志可选参数."""

    context: Mapping[str, JsonValue] | None
    extra: LoggerExtra | None
    logger_name: str


class RouteSafetyOptions(TypedDict, total=False):
    """safe_route_call 可选参数."""

    context: Mapping[str, JsonValue] | None
    extra: LoggerExtra | None
    expected_exceptions: tuple[type[BaseException], ...]
    fallback_exception: type[AppError]
    log_event: str


def log_with_context(
    level: LogLevel,
    event: str,
    *,
    module: str,
    action: str,
    **options: Unpack[LogContextOptions],
) -> None:
    """记录带有统一上下文字段的结构化日志.

    Args:
        level: 日志级别,使用 structlog 的方法名,例如 "info", "error".
        event: 日志事件描述,建议使用动词短语.
        module: 所属模块或领域,用于快速过滤.
        action: 当前操作名称,通常对应视图或服务方法名.
        **options: 支持 context, extra, logger_name 选项以扩展日志内容.

    """
    logger = get_logger(options.get("logger_name", "app"))
    payload: JsonDict = {"module": module, "action": action}

    context_opt = options.get("context")
    extra_opt = options.get("extra")
    if context_opt:
        payload.update(context_opt)
    if extra_opt:
        payload.update(extra_opt)

    log_method = getattr(logger, level, logger.error)
    log_method(event, **payload)


def _expected_level(exc: BaseException) -> LogLevel:
    # 数据完整性等高严重度业务异常需要运维关注
    if isinstance(exc, AppError) and exc.severity in (ErrorSeverity.HIGH, ErrorSeverity.CRITICAL):
        return "error"
    return "warning"


def safe_route_call(
    func: Callable[[], R],
    *,
    module: str,
    action: str,
    public_error: str,
    **options: Unpack[RouteSafetyOptions],
) -> R:
    """安全执行视图逻辑,集中处理日志、事务与异常转换.

    成功时提交事务; 预期异常回滚后原样抛出; 数据库异常(含提交失败)回滚后包装为
    ``DatabaseError``; 其余未预期异常回滚后包装为 ``fallback_exception``.

    Args:
        func: 真实的业务函数,建议为局部闭包以捕获参数.
        module: 记录日志用的模块名称.
        action: 业务动作名称,例如 "list_logs".
        public_error: 暴露给客户端的统一错误文案.
        **options: 安全包装配置,支持 context, extra, expected_exceptions,
            fallback_exception, log_event 等键.

    Returns:
        业务函数的执行结果,通常是 Flask 的响应对象.

    Raises:
        AppError: 业务逻辑主动抛出, 或被包装为 DatabaseError / fallback_exception.

    """
    handled_exceptions = DEFAULT_EXPECTED_EXCEPTIONS
    expected_exceptions = options.get("expected_exceptions")
    if expected_exceptions:
        handled_exceptions += expected_exceptions

    fallback_exception = options.get("fallback_exception", SystemError)
    event = options.get("log_event") or f"{action}执行失败"
    context_payload: dict[str, JsonValue] = dict(options.get("context") or {})
    extra_payload: dict[str, JsonValue] = dict(cast("LoggerExtra | None", options.get("extra")) or {})

    def _fail(exc: BaseException, level: LogLevel, extra: dict[str, JsonValue]) -> None:
        db.session.rollback()
        log_with_context(
            level,
            event,
            module=module,
            action=action,
            context=context_payload,
            extra={**extra_payload, "error_type": exc.__class__.__name__, **extra},
        )

    try:
        result = func()
    except handled_exceptions as exc:
        error_extra: dict[str, JsonValue] = {"error_message": str(exc)}
        if isinstance(exc, ValidationError) and exc.pointer:
            error_extra["error_pointer"] = exc.pointer
        if isinstance(exc, AppError) and exc.extra:
            error_extra["error_extra"] = exc.extra
        _fail(exc, _expected_level(exc), error_extra)
        raise
    except SQLAlchemyError as exc:
        _fail(exc, "error", {"unexpected": True})
        raise DatabaseError(public_error) from exc
    except Exception as exc:
        _fail(exc, "error", {"unexpected": True})
        raise fallback_exception(public_error) from exc

    try:
        db.session.commit()
    except SQLAlchemyError as exc:
        _fail(exc, "error", {"unexpected": True, "commit_failed": True})
        raise DatabaseError(public_error) from exc
    return result


__all__ = ["RouteSafetyOptions", "log_with_context", "safe_route_call"]
