"""Flask-RESTX Api 定制.

目标:
- 保持 `{data, meta}` / `{errors: [...]}` 响应口径不变
- 将 RestX 内部错误统一映射为 `unified_error_response`
"""

from __future__ import annotations

from flask import Response, current_app, jsonify
from flask_restx import Api

from bookkeeping.constants import HttpStatus
from bookkeeping.utils.response_utils import unified_error_response


class BookkeepingApi(Api):
    """统一错误封套的 RestX Api."""

    def render_root(self) -> tuple[Response, int]:  # type: ignore[override]
        """`GET /api/`: 返回服务名称与版本."""
        return (
            jsonify(
                {
                    "name": current_app.config.get("APP_NAME", self.title),
                    "version": current_app.config.get("APP_VERSION", self.version),
                },
            ),
            HttpStatus.OK,
        )

    def handle_error(self, e: Exception) -> Response:  # type: ignore[override]
        payload, status_code = unified_error_response(e)
        response = jsonify(payload)
        response.status_code = status_code
        return response
