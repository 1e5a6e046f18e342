"""
Bookkeeping - 附件模型
"""

from bookkeeping import db
from bookkeeping.utils.time_utils import time_utils


class Attachment(db.Model):
    """日志附件元数据(文件内容本身不由本服务保存)."""

    __tablename__ = "attachments"

    id = db.Column(db.Integer, primary_key=True)
    file_name = db.Column(db.String(255), nullable=False)
    size = db.Column(db.BigInteger, nullable=False, default=0)
    mime_type = db.Column(db.String(255), nullable=False)
    original_name = db.Column(db.String(255), nullable=False)
    path = db.Column(db.String(1024), nullable=False)
    encoding = db.Column(db.String(64), nullable=False)
    log_id = db.Column(db.Integer, db.ForeignKey("logs.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = db.Column(db.DateTime(timezone=True), default=time_utils.now, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=time_utils.now, onupdate=time_utils.now, nullable=False)

    __table_args__ = (db.CheckConstraint("size >= 0", name="ck_attachments_size_non_negative"),)

    log = db.relationship("Log", back_populates="attachments")

    def to_dict(self) -> dict:
        """转换为对外 camelCase 字典."""
        return {
            "id": self.id,
            "fileName": self.file_name,
            "size": self.size,
            "mimeType": self.mime_type,
            "originalName": self.original_name,
            "path": self.path,
            "encoding": self.encoding,
            "logId": self.log_id,
            "createdAt": time_utils.to_unix_ms(self.created_at),
            "updatedAt": time_utils.to_unix_ms(self.updated_at),
        }

    def __repr__(self) -> str:
        return f"<Attachment {self.file_name}>"
