"""Bookkeeping JSON API (Flask-RESTX) 入口.

- `/api/**` 对外 API blueprint
- 提供 Swagger UI 与 OpenAPI JSON 导出能力
"""

from __future__ import annotations

from flask import Flask

from bookkeeping.settings import Settings


def register_api_blueprints(app: Flask, settings: Settings) -> None:
    """按 Settings 注册 API blueprints."""
    from bookkeeping.api.v1 import create_api_blueprint  # noqa: PLC0415

    api_bp = create_api_blueprint(settings)
    app.register_blueprint(api_bp, url_prefix="/api")
