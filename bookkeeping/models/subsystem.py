"""
Bookkeeping - 子系统模型
"""

from bookkeeping import db
from bookkeeping.utils.time_utils import time_utils


class Subsystem(db.Model):
    """子系统模型(探测器/软件组件等)."""

    __tablename__ = "subsystems"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False, unique=True, index=True)
    created_at = db.Column(db.DateTime(timezone=True), default=time_utils.now, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=time_utils.now, onupdate=time_utils.now, nullable=False)

    logs = db.relationship("Log", secondary="log_subsystems", back_populates="subsystems", lazy="select")

    def __init__(self, name: str) -> None:
        self.name = name

    def to_dict(self) -> dict:
        """转换为对外 camelCase 字典."""
        return {
            "id": self.id,
            "name": self.name,
            "createdAt": time_utils.to_unix_ms(self.created_at),
            "updatedAt": time_utils.to_unix_ms(self.updated_at),
        }

    def __repr__(self) -> str:
        return f"<Subsystem {self.name}>"
