"""附件写路径 schema."""

from __future__ import annotations

from typing import Any

from pydantic import Field, StrictStr, field_validator

from bookkeeping.schemas.base import PayloadSchema


def _require_text(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError("must be a string")
    cleaned = value.strip()
    if not cleaned:
        raise ValueError("is not allowed to be empty")
    return cleaned


class AttachmentPayload(PayloadSchema):
    """单个附件的元数据."""

    file_name: StrictStr = Field(alias="fileName")
    size: int = Field(ge=0)
    mime_type: StrictStr = Field(alias="mimeType")
    original_name: StrictStr = Field(alias="originalName")
    path: StrictStr
    encoding: StrictStr

    @field_validator("file_name", "mime_type", "original_name", "path", "encoding", mode="before")
    @classmethod
    def _validate_text(cls, value: Any) -> str:
        return _require_text(value)


class LogAttachmentPayload(AttachmentPayload):
    """独立创建附件时需指定所属日志."""

    log_id: int = Field(alias="logId", ge=1)


class CreateAttachmentsPayload(PayloadSchema):
    """``POST /api/attachments``."""

    attachments: list[LogAttachmentPayload] = Field(min_length=1)
