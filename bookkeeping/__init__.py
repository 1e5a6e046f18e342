"""Bookkeeping - Flask 应用初始化.

基于 Flask 的日志簿与 Run 元数据 REST 服务.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from flask import Flask, jsonify
from flask_cors import CORS
from flask_sqlalchemy import SQLAlchemy

from bookkeeping.settings import Settings
from bookkeeping.utils.structlog_config import configure_structlog, get_system_logger
from bookkeeping.utils.time_utils import time_utils

if TYPE_CHECKING:
    from flask.typing import ResponseReturnValue

# 初始化扩展
db = SQLAlchemy()
cors = CORS()

# 记录应用启动时间(供 /api/status 计算运行时长)
app_start_time = time_utils.now()


def create_app(*, settings: Settings | None = None) -> Flask:
    """创建Flask应用实例.

    Args:
        settings: 可选的配置对象,用于测试或多环境启动.

    Returns:
        Flask: Flask应用实例

    """
    resolved_settings = settings or Settings.load()
    app = Flask(__name__)

    # 配置应用
    configure_app(app, resolved_settings)

    # 初始化扩展
    initialize_extensions(app, resolved_settings)

    # 配置统一日志系统
    configure_structlog(app)

    # 注册请求上下文与 wide event
    from bookkeeping.infra.logging.request_middleware import register_request_logging  # noqa: PLC0415

    register_request_logging(app)

    # 注册 API 与 CLI
    from bookkeeping.api import register_api_blueprints  # noqa: PLC0415
    from bookkeeping.cli import register_cli  # noqa: PLC0415

    register_api_blueprints(app, resolved_settings)
    register_cli(app)

    # 注册全局错误处理器(API 蓝图之外的请求)
    @app.errorhandler(Exception)
    def handle_global_exception(error: Exception) -> ResponseReturnValue:
        """全局错误处理."""
        from bookkeeping.utils.response_utils import unified_error_response  # noqa: PLC0415

        payload, status_code = unified_error_response(error)
        if status_code >= 500:
            get_system_logger().error("未处理的应用异常", module="system", exception=str(error), exc_info=error)
        return jsonify(payload), status_code

    get_system_logger().info(
        "应用初始化完成",
        module="system",
        environment=resolved_settings.environment,
        api_docs_enabled=resolved_settings.api_docs_enabled,
    )
    return app


def configure_app(app: Flask, settings: Settings) -> None:
    """写入 Settings 提供的配置.

    Args:
        app: Flask 应用实例.
        settings: 统一配置对象,包含环境变量解析、默认值与校验结果.

    """
    app.config.from_mapping(settings.to_flask_config())
    app.json.sort_keys = False


def initialize_extensions(app: Flask, settings: Settings) -> None:
    """初始化数据库与 CORS 扩展."""
    db.init_app(app)

    cors.init_app(
        app,
        resources={
            r"/api/*": {
                "origins": list(settings.cors_origins),
                "methods": ["GET", "POST", "DELETE", "OPTIONS"],
                "allow_headers": ["Content-Type", "X-Request-ID"],
            },
        },
    )


from bookkeeping import models  # noqa: F401, E402
