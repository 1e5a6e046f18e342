"""Bookkeeping - 统一响应工具.

成功响应: ``{"data": ..., "meta": {...}}``;
错误响应: ``{"errors": [{"status", "title", "detail", "source": {"pointer"}}]}``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from flask import Response, jsonify
from werkzeug.exceptions import HTTPException

from bookkeeping.api.error_mapping import map_exception_to_status
from bookkeeping.constants import HttpStatus
from bookkeeping.constants.system_constants import ErrorMessages
from bookkeeping.core.exceptions import AppError, ValidationError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from bookkeeping.types.structures import JsonDict, JsonValue


def unified_success_response(
    data: object | None = None,
    *,
    status: int = HttpStatus.OK,
    meta: Mapping[str, object] | None = None,
) -> tuple[JsonDict, int]:
    """生成统一的成功响应载荷."""
    payload: JsonDict = {"data": cast("JsonValue", data)}
    if meta:
        payload["meta"] = cast("JsonDict", dict(meta))
    return payload, status


def build_error_object(error: BaseException, status_code: int) -> JsonDict:
    """将异常转换为单条错误对象.

    5xx 错误只输出通用文案,避免泄露内部细节.
    """
    if isinstance(error, ValidationError):
        item: JsonDict = {
            "status": str(status_code),
            "title": ErrorMessages.VALIDATION_ERROR,
            "detail": error.message,
        }
        if error.pointer:
            item["source"] = {"pointer": error.pointer}
        return item

    if isinstance(error, HTTPException) and status_code < HttpStatus.INTERNAL_SERVER_ERROR:
        item = {"status": str(status_code), "title": error.name}
        if error.description:
            item["detail"] = error.description
        return item

    if isinstance(error, AppError) and status_code < HttpStatus.INTERNAL_SERVER_ERROR:
        return {"status": str(status_code), "title": error.message}

    return {"status": str(status_code), "title": ErrorMessages.INTERNAL_ERROR}


def unified_error_response(
    error: BaseException,
    *,
    status_code: int | None = None,
) -> tuple[JsonDict, int]:
    """生成统一的错误响应载荷.

    Args:
        error: 异常对象.
        status_code: HTTP 状态码,可选,默认根据异常类型自动映射.

    Returns:
        (错误响应载荷, HTTP 状态码).

    """
    safe_error = error if isinstance(error, Exception) else Exception(str(error))
    final_status = status_code or map_exception_to_status(safe_error, default=HttpStatus.INTERNAL_SERVER_ERROR)
    payload: JsonDict = {"errors": [build_error_object(safe_error, final_status)]}
    return payload, final_status


def jsonify_unified_success(*args: object, **kwargs: object) -> tuple[Response, int]:
    """返回 Flask Response 对象的成功响应便捷函数."""
    payload, status = unified_success_response(*args, **kwargs)  # type: ignore[arg-type]
    return jsonify(payload), status
