"""日志写路径 schema."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from bookkeeping.constants.validation_limits import (
    LOG_TEXT_MIN_LENGTH,
    LOG_TITLE_MAX_LENGTH,
    LOG_TITLE_MIN_LENGTH,
)
from bookkeeping.schemas.attachments import AttachmentPayload
from bookkeeping.schemas.base import PayloadSchema


def _dedupe(values: list[int]) -> list[int]:
    return list(dict.fromkeys(values))


class CreateLogPayload(PayloadSchema):
    """``POST /api/logs``.

    ``tags`` 为可选的标签 id 列表; 其余字段与对外契约一致.
    """

    title: str = Field(min_length=LOG_TITLE_MIN_LENGTH, max_length=LOG_TITLE_MAX_LENGTH)
    text: str = Field(min_length=LOG_TEXT_MIN_LENGTH)
    parent_log_id: int | None = Field(default=None, alias="parentLogId", ge=1)
    run_numbers: list[int] = Field(default_factory=list, alias="runNumbers")
    tags: list[int] = Field(default_factory=list)
    attachments: list[AttachmentPayload] = Field(default_factory=list)

    @field_validator("title", "text", mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("run_numbers", "tags", mode="after")
    @classmethod
    def _validate_ids(cls, value: list[int]) -> list[int]:
        if any(item < 1 for item in value):
            raise ValueError("must only contain positive integers")
        return _dedupe(value)
