"""Bookkeeping 项目的结构化日志配置与辅助函数."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, cast

import structlog
from flask import Flask, current_app, has_request_context

from bookkeeping.utils.logging.context_vars import request_id_var

if TYPE_CHECKING:
    from structlog.typing import BindableLogger, Processor

    from bookkeeping.types.structures import JsonValue, LoggerExtra, StructlogEventDict



class StructlogConfig:
    """structlog 配置核心类.

    负责配置 structlog 的处理器链、上下文注入与渲染器.

    Attributes:
        configured: 是否已配置标志.
        json_output: 是否输出 JSON(非 TTY 环境默认开启).

    Example:
        >>> config = StructlogConfig()
        >>> config.configure(app)
        >>> logger = get_logger('my_module')

    """

    def __init__(self) -> None:
        self.configured = False
        self.json_output = not sys.stdout.isatty()

    def configure(self, app: Flask | None = None) -> None:
        """初始化 structlog 处理器(幂等).

        Args:
            app: Flask 应用实例,可选.如果提供,将按应用配置调整日志级别.

        """
        if not self.configured:
            processors = [
                structlog.stdlib.filter_by_level,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.stdlib.add_log_level,
                structlog.processors.StackInfoRenderer(),
                self._add_request_context,
                self._add_global_context,
            ]
            if self.json_output:
                processors.append(structlog.processors.format_exc_info)
            processors.append(self._get_renderer())
            structlog.configure(
                processors=cast("list[structlog.types.Processor]", processors),
                context_class=dict,
                logger_factory=structlog.stdlib.LoggerFactory(),
                wrapper_class=structlog.stdlib.BoundLogger,
                cache_logger_on_first_use=True,
            )
            self.configured = True

        if app is not None:
            self._attach_app(app)

    @staticmethod
    def _attach_app(app: Flask) -> None:
        level_name = str(app.config.get("LOG_LEVEL", "INFO")).upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            level = logging.INFO
        root_logger = logging.getLogger()
        if not root_logger.handlers:
            logging.basicConfig(format="%(message)s", stream=sys.stdout)
        root_logger.setLevel(level)

    @staticmethod
    def _add_request_context(
        _logger: BindableLogger,
        _method_name: str,
        event_dict: StructlogEventDict,
    ) -> StructlogEventDict:
        """向事件字典写入请求上下文(request_id)."""
        request_id = request_id_var.get()
        if request_id is not None:
            event_dict["request_id"] = request_id
        return event_dict

    @staticmethod
    def _add_global_context(
        _logger: BindableLogger,
        _method_name: str,
        event_dict: StructlogEventDict,
    ) -> StructlogEventDict:
        """附加应用名、版本与环境等全局上下文."""
        # 延迟导入,避免 settings -> structlog_config 的循环依赖
        from bookkeeping.settings import APP_VERSION

        try:
            event_dict["app_name"] = current_app.config["APP_NAME"]
            event_dict["app_version"] = current_app.config.get("APP_VERSION", APP_VERSION)
            event_dict["environment"] = current_app.config.get("ENVIRONMENT", "development")
        except (RuntimeError, KeyError):
            event_dict["app_name"] = "bookkeeping"
            event_dict["app_version"] = APP_VERSION

        if has_request_context():
            event_dict.setdefault("request_id", request_id_var.get())

        event_dict["logger_name"] = getattr(_logger, "name", "unknown")
        return event_dict

    def _get_renderer(self) -> Processor:
        """根据终端能力返回渲染器."""
        if self.json_output:
            return structlog.processors.JSONRenderer()
        return structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=False, max_frames=10),
        )


structlog_config = StructlogConfig()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """获取结构化日志记录器.

    Args:
        name: 日志记录器名称,通常使用模块名.

    Returns:
        绑定的 structlog 日志记录器实例.

    """
    structlog_config.configure()
    return structlog.get_logger(name)


def configure_structlog(app: Flask) -> None:
    """配置 structlog 并注册 Flask 钩子."""
    structlog_config.configure(app)

    @app.teardown_appcontext
    def log_teardown_error(exception: BaseException | None) -> None:
        if exception:
            get_logger("app").error("应用请求处理异常", module="system", exception=str(exception))


def log_info(message: str, module: str = "app", **kwargs: JsonValue | LoggerExtra) -> None:
    """记录信息级别日志.

    Example:
        >>> log_info('标签创建成功', module='tags', tag_id=3)

    """
    get_logger("app").info(message, module=module, **kwargs)


def log_debug(message: str, module: str = "app", **kwargs: JsonValue | LoggerExtra) -> None:
    """记录调试级别日志."""
    get_logger("app").debug(message, module=module, **kwargs)


def get_system_logger() -> structlog.stdlib.BoundLogger:
    """返回系统级 logger."""
    return get_logger("system")


__all__ = [
    "configure_structlog",
    "get_logger",
    "get_system_logger",
    "log_debug",
    "log_info",
]
