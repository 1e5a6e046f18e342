"""Schema 校验与错误映射."""

from __future__ import annotations

from typing import TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from bookkeeping.core.exceptions import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

_PYDANTIC_MESSAGES: dict[str, str] = {
    "extra_forbidden": "is not allowed",
    "missing": "is required",
    "int_parsing": "must be a number",
    "int_type": "must be a number",
    "string_type": "must be a string",
    "list_type": "must be an array",
    "dict_type": "must be of type object",
    "model_type": "must be of type object",
    "string_too_short": "length must be at least {min_length} characters long",
    "string_too_long": "length must be less than or equal to {max_length} characters long",
    "greater_than_equal": "must be greater than or equal to {ge}",
    "greater_than": "must be greater than {gt}",
    "literal_error": "must be one of [{expected}]",
}


def validate_or_raise(model: type[ModelT], payload: object, *, scope: str) -> ModelT:
    """执行 schema 校验并抛出项目的 ValidationError.

    Args:
        model: pydantic model.
        payload: 待校验的 payload(query dict 或 JSON body).
        scope: 错误字段路径前缀,如 ``query`` 或 ``body``.

    Raises:
        ValidationError: 第一条校验错误,``field`` 为点分隔的完整路径.

    """
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        message, field = _extract_first_error(exc, scope=scope)
        raise ValidationError(message, field=field) from None


def _format_field(loc: tuple[object, ...], scope: str) -> str:
    parts = [scope, *(str(item) for item in loc)]
    return ".".join(part for part in parts if part)


def _extract_first_error(exc: PydanticValidationError, *, scope: str) -> tuple[str, str]:
    errors = exc.errors()
    if not errors:
        return f'"{scope}" is invalid', scope

    first = errors[0]
    loc = first.get("loc") or ()
    field = _format_field(tuple(loc), scope)

    ctx = first.get("ctx") or {}
    raw_error = ctx.get("error") if isinstance(ctx, dict) else None
    if isinstance(raw_error, BaseException):
        # field_validator 中抛出的 ValueError 文案不含字段名
        return f'"{field}" {raw_error}', field

    template = _PYDANTIC_MESSAGES.get(str(first.get("type")))
    if template is not None:
        try:
            detail = template.format(**ctx) if isinstance(ctx, dict) else template
        except (KeyError, IndexError):
            detail = template
        return f'"{field}" {detail}', field

    msg = first.get("msg")
    if isinstance(msg, str) and msg.strip():
        return f'"{field}" {msg}', field
    return f'"{field}" is invalid', field
