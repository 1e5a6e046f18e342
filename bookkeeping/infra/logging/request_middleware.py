"""请求级别的上下文注入与 wide event 发射(Infra).

- request_id 通过 contextvars 在整个请求生命周期可用, 并回写到响应头.
- 每个请求完成时发射一条 ``http_request_completed`` 事件.
  查询参数只记录 deepObject 的顶层分组(``page``/``filter``/``sort``), 不记录取值.
"""

from __future__ import annotations

import re
import time
from contextlib import suppress
from typing import TYPE_CHECKING
from uuid import uuid4

from flask import Flask, g, request

from bookkeeping.utils.logging.context_vars import request_id_var
from bookkeeping.utils.structlog_config import get_logger

if TYPE_CHECKING:
    from contextvars import Token

    from werkzeug.datastructures import MultiDict
    from werkzeug.wrappers.response import Response

    from bookkeeping.types.structures import JsonDict

REQUEST_ID_HEADER = "X-Request-ID"
_REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.:-]{0,127}$")


def resolve_request_id(raw_value: str | None) -> str:
    """沿用合法的上游 request id, 否则生成新的 ``req_<hex>``."""
    value = (raw_value or "").strip()
    if value and _REQUEST_ID_PATTERN.match(value):
        return value
    return f"req_{uuid4().hex}"


def summarize_query_groups(args: MultiDict[str, str]) -> list[str]:
    """``page[limit]=1&filter[tag][values]=2`` -> ``["filter", "page"]``."""
    return sorted({key.split("[", 1)[0] for key in args})


def build_request_event(response: Response, *, started_at: float | None) -> JsonDict:
    """汇总一次请求的 wide event 字段."""
    status_code = int(response.status_code or 0)
    duration_ms = None
    if started_at is not None:
        duration_ms = round((time.perf_counter() - started_at) * 1000)
    url_rule = request.url_rule
    return {
        "action": f"{request.method} {request.path}",
        "status_code": status_code,
        "outcome": "success" if 0 < status_code < 400 else "error",
        "duration_ms": duration_ms,
        "route": url_rule.rule if url_rule else None,
        "endpoint": request.endpoint,
        "query_groups": summarize_query_groups(request.args),
    }


def register_request_logging(app: Flask) -> None:
    """注册请求级别的上下文注入与 wide event."""

    @app.before_request
    def _bind_request_context() -> None:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request_id_token: Token[str | None] = request_id_var.set(request_id)
        # teardown 时需用 token 复位,避免同线程后续请求串号
        g._request_id_token = request_id_token
        g.request_id = request_id
        g._request_start_perf = time.perf_counter()

    @app.after_request
    def _emit_request_wide_event(response: Response) -> Response:
        request_id = request_id_var.get() or getattr(g, "request_id", None) or resolve_request_id(None)
        response.headers.setdefault(REQUEST_ID_HEADER, request_id)

        event = build_request_event(response, started_at=getattr(g, "_request_start_perf", None))
        get_logger("http").info("http_request_completed", module="http", **event)
        return response

    @app.teardown_request
    def _reset_request_context(_exc: BaseException | None) -> None:
        request_id_token = getattr(g, "_request_id_token", None)
        with suppress(LookupError, RuntimeError, ValueError):
            if request_id_token is not None:
                request_id_var.reset(request_id_token)
                g._request_id_token = None


__all__ = [
    "REQUEST_ID_HEADER",
    "build_request_event",
    "register_request_logging",
    "resolve_request_id",
    "summarize_query_groups",
]
