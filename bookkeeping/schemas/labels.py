"""标签/子系统写路径 schema."""

from __future__ import annotations

from typing import Any

from pydantic import field_validator

from bookkeeping.constants.validation_limits import SUBSYSTEM_NAME_MAX_LENGTH, TAG_TEXT_MAX_LENGTH
from bookkeeping.schemas.base import PayloadSchema


def _validate_label(value: Any, *, max_length: int) -> str:
    if not isinstance(value, str):
        raise ValueError("must be a string")
    cleaned = value.strip()
    if not cleaned:
        raise ValueError("is not allowed to be empty")
    if len(cleaned) > max_length:
        raise ValueError(f"length must be less than or equal to {max_length} characters long")
    return cleaned


class CreateTagPayload(PayloadSchema):
    """``POST /api/tags``."""

    text: str

    @field_validator("text", mode="before")
    @classmethod
    def _validate_text(cls, value: Any) -> str:
        return _validate_label(value, max_length=TAG_TEXT_MAX_LENGTH)


class CreateSubsystemPayload(PayloadSchema):
    """``POST /api/subsystems``(对外字段名沿用 ``text``)."""

    text: str

    @field_validator("text", mode="before")
    @classmethod
    def _validate_text(cls, value: Any) -> str:
        return _validate_label(value, max_length=SUBSYSTEM_NAME_MAX_LENGTH)
