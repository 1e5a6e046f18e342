"""附件 Repository(不 commit)."""

from __future__ import annotations

from bookkeeping import db
from bookkeeping.models.attachment import Attachment


class AttachmentsRepository:
    """附件查询/写入 Repository."""

    @staticmethod
    def list_by_log(log_id: int) -> list[Attachment]:
        return list(db.session.query(Attachment).filter(Attachment.log_id == log_id).order_by(Attachment.id.asc()).all())

    @staticmethod
    def get_attachment(attachment_id: int) -> Attachment | None:
        return db.session.get(Attachment, attachment_id)

    @staticmethod
    def add_all(attachments: list[Attachment]) -> list[Attachment]:
        db.session.add_all(attachments)
        db.session.flush()
        return attachments
