"""API v1 (Flask-RESTX).

该包仅承载对外 JSON API 的路由层与 OpenAPI 文档能力.
业务编排与数据访问复用 services/repositories.
对外路径不带版本段(`/api/logs`), 与既有客户端契约保持一致.
"""

from __future__ import annotations

from typing import cast

from flask import Blueprint, Response, jsonify

from bookkeeping.api.v1.api import BookkeepingApi
from bookkeeping.api.v1.namespaces.attachments import ns as attachments_ns
from bookkeeping.api.v1.namespaces.logs import ns as logs_ns
from bookkeeping.api.v1.namespaces.runs import ns as runs_ns
from bookkeeping.api.v1.namespaces.status import ns as status_ns
from bookkeeping.api.v1.namespaces.subsystems import ns as subsystems_ns
from bookkeeping.api.v1.namespaces.tags import ns as tags_ns
from bookkeeping.settings import Settings


def create_api_blueprint(settings: Settings) -> Blueprint:
    """创建并配置 API Blueprint.

    - Swagger UI: `/api/docs`(可配置关闭)
    - OpenAPI JSON: `/api/openapi.json`
    """
    blueprint = Blueprint("api_v1", __name__)

    docs_path = "/docs" if settings.api_docs_enabled else cast(str, False)
    api = BookkeepingApi(
        blueprint,
        title=settings.app_name,
        version=settings.app_version,
        doc=docs_path,
    )

    api.add_namespace(status_ns, path="/status")
    api.add_namespace(logs_ns, path="/logs")
    api.add_namespace(attachments_ns, path="/attachments")
    api.add_namespace(tags_ns, path="/tags")
    api.add_namespace(runs_ns, path="/runs")
    api.add_namespace(subsystems_ns, path="/subsystems")

    @blueprint.get("/openapi.json")
    def openapi_json() -> tuple[Response, int]:
        return jsonify(api.__schema__), 200

    return blueprint
