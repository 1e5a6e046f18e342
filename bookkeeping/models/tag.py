"""
Bookkeeping - 标签模型
"""

from bookkeeping import db
from bookkeeping.utils.time_utils import time_utils


class Tag(db.Model):
    """标签模型.

    可复用的文本标签,挂载到日志上用于筛选.

    Attributes:
        id: 标签主键.
        text: 标签文本,唯一.
        created_at: 创建时间.
        updated_at: 更新时间.
    """

    __tablename__ = "tags"

    id = db.Column(db.Integer, primary_key=True)
    text = db.Column(db.String(255), nullable=False, unique=True, index=True)
    created_at = db.Column(db.DateTime(timezone=True), default=time_utils.now, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=time_utils.now, onupdate=time_utils.now, nullable=False)

    # 删除标签时 ORM 会同步清理 log_tags 关联行
    logs = db.relationship("Log", secondary="log_tags", back_populates="tags", lazy="select")

    def __init__(self, text: str) -> None:
        self.text = text

    def to_dict(self) -> dict:
        """转换为对外 camelCase 字典."""
        return {
            "id": self.id,
            "text": self.text,
            "createdAt": time_utils.to_unix_ms(self.created_at),
            "updatedAt": time_utils.to_unix_ms(self.updated_at),
        }

    def __repr__(self) -> str:
        return f"<Tag {self.text}>"
