"""Base Resource helpers.

资源类只负责: 解析 query/body -> 调用 service -> 序列化封套.
事务提交与异常日志统一交给 `safe_route_call`.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any, TypeVar, cast

from flask import Response, request
from flask_restx import Resource

from bookkeeping.api.v1.resources.query_parsers import parse_deep_object, parse_json_body
from bookkeeping.constants import HttpStatus
from bookkeeping.infra.route_safety import safe_route_call
from bookkeeping.schemas.validation import validate_or_raise
from bookkeeping.utils.response_utils import jsonify_unified_success

if TYPE_CHECKING:
    from pydantic import BaseModel

    from bookkeeping.infra.route_safety import RouteSafetyOptions
    from bookkeeping.types.listing import PaginationMeta
    from bookkeeping.types.structures import JsonValue, LoggerExtra

R = TypeVar("R")
ModelT = TypeVar("ModelT", bound="BaseModel")


class BaseResource(Resource):
    """统一封套与 safe_route_call 适配."""

    @staticmethod
    def parse_query(model: type[ModelT]) -> ModelT:
        """按 deepObject 规则展开 ``request.args`` 并校验."""
        return validate_or_raise(model, parse_deep_object(request.args), scope="query")

    @staticmethod
    def parse_body(model: type[ModelT], raw_payload: object) -> ModelT:
        """校验 JSON body; ``raw_payload`` 需在闭包外读取."""
        return validate_or_raise(model, parse_json_body(raw_payload), scope="body")

    def success(
        self,
        data: object | None = None,
        *,
        status: int = HttpStatus.OK,
        meta: Mapping[str, object] | None = None,
    ) -> tuple[Response, int]:
        return jsonify_unified_success(data, status=status, meta=meta)

    def created(self, data: object) -> tuple[Response, int]:
        return self.success(data, status=HttpStatus.CREATED)

    def paginated(self, items: list[Any], meta: PaginationMeta) -> tuple[Response, int]:
        """列表封套: ``{data: [...], meta: {page: {pageCount, totalCount}}}``."""
        return self.success(items, meta={"page": meta.to_dict()})

    def safe_call(
        self,
        func: Callable[[], R],
        *,
        module: str,
        action: str,
        public_error: str,
        context: Mapping[str, JsonValue] | None = None,
        extra: LoggerExtra | None = None,
        **options: RouteSafetyOptions,
    ) -> R:
        return safe_route_call(
            func,
            module=module,
            action=action,
            public_error=public_error,
            context=context,
            extra=extra,
            **cast("dict[str, Any]", options),
        )
