"""
Bookkeeping - 用户模型
"""

from bookkeeping import db
from bookkeeping.utils.time_utils import time_utils


class User(db.Model):
    """用户模型.

    Attributes:
        id: 用户主键.
        external_id: 外部身份系统中的编号(如 CERN person id),唯一.
        name: 展示名称.
        created_at: 创建时间.
        updated_at: 更新时间.
    """

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    external_id = db.Column(db.Integer, nullable=False, unique=True, index=True)
    name = db.Column(db.String(255), nullable=False, index=True)
    created_at = db.Column(db.DateTime(timezone=True), default=time_utils.now, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=time_utils.now, onupdate=time_utils.now, nullable=False)

    logs = db.relationship("Log", back_populates="author", lazy="dynamic")

    def __init__(self, external_id: int, name: str) -> None:
        self.external_id = external_id
        self.name = name

    def to_dict(self) -> dict:
        """转换为对外 camelCase 字典."""
        return {
            "id": self.id,
            "externalId": self.external_id,
            "name": self.name,
        }

    def __repr__(self) -> str:
        return f"<User {self.name}>"
