"""
Bookkeeping - 日志模型
"""

from bookkeeping import db
from bookkeeping.constants.entity_types import LogOrigin, LogSubtype
from bookkeeping.utils.time_utils import time_utils

log_tags = db.Table(
    "log_tags",
    db.Column("log_id", db.Integer, db.ForeignKey("logs.id", ondelete="CASCADE"), primary_key=True),
    db.Column("tag_id", db.Integer, db.ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True, index=True),
)

log_runs = db.Table(
    "log_runs",
    db.Column("log_id", db.Integer, db.ForeignKey("logs.id", ondelete="CASCADE"), primary_key=True),
    db.Column("run_id", db.Integer, db.ForeignKey("runs.id", ondelete="CASCADE"), primary_key=True, index=True),
)

log_subsystems = db.Table(
    "log_subsystems",
    db.Column("log_id", db.Integer, db.ForeignKey("logs.id", ondelete="CASCADE"), primary_key=True),
    db.Column(
        "subsystem_id",
        db.Integer,
        db.ForeignKey("subsystems.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)


class Log(db.Model):
    """日志模型.

    日志可以回复另一条日志,形成以根日志为起点的线程.
    根日志的 ``root_log_id`` 等于自身 id; 回复日志的 ``root_log_id`` 与父日志一致.

    Attributes:
        id: 日志主键.
        title: 标题(3-140 字符).
        text: 正文(至少 3 字符).
        author_id: 作者用户 id.
        origin: human/process.
        subtype: run/subsystem/announcement/intervention/comment.
        parent_log_id: 父日志 id,根日志为空.
        root_log_id: 线程根日志 id.
        created_at: 创建时间.
        updated_at: 更新时间.
    """

    __tablename__ = "logs"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(140), nullable=False, index=True)
    text = db.Column(db.Text, nullable=False)
    author_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    origin = db.Column(db.String(20), nullable=False, default=LogOrigin.HUMAN, index=True)
    subtype = db.Column(db.String(20), nullable=False, default=LogSubtype.RUN)
    parent_log_id = db.Column(db.Integer, db.ForeignKey("logs.id"), nullable=True, index=True)
    # 根日志需先写入获得 id 后才能回填
    root_log_id = db.Column(db.Integer, db.ForeignKey("logs.id"), nullable=True, index=True)
    created_at = db.Column(db.DateTime(timezone=True), default=time_utils.now, nullable=False, index=True)
    updated_at = db.Column(db.DateTime(timezone=True), default=time_utils.now, onupdate=time_utils.now, nullable=False)

    __table_args__ = (
        db.CheckConstraint("origin IN ('" + "','".join(LogOrigin.ALL) + "')", name="ck_logs_origin"),
        db.CheckConstraint("subtype IN ('" + "','".join(LogSubtype.ALL) + "')", name="ck_logs_subtype"),
    )

    author = db.relationship("User", back_populates="logs", lazy="joined")
    parent = db.relationship("Log", remote_side=[id], foreign_keys=[parent_log_id])
    tags = db.relationship("Tag", secondary=log_tags, back_populates="logs", order_by="Tag.id")
    runs = db.relationship("Run", secondary=log_runs, back_populates="logs", order_by="Run.id")
    subsystems = db.relationship("Subsystem", secondary=log_subsystems, back_populates="logs", order_by="Subsystem.id")
    attachments = db.relationship(
        "Attachment",
        back_populates="log",
        cascade="all, delete-orphan",
        order_by="Attachment.id",
    )

    def to_dict(self, *, replies: int | None = None) -> dict:
        """转换为对外 camelCase 字典.

        Args:
            replies: 后代数量,由调用方统计后传入.

        """
        payload = {
            "id": self.id,
            "title": self.title,
            "text": self.text,
            "author": self.author.to_dict() if self.author else None,
            "origin": self.origin,
            "subtype": self.subtype,
            "parentLogId": self.parent_log_id,
            "rootLogId": self.root_log_id,
            "createdAt": time_utils.to_unix_ms(self.created_at),
            "updatedAt": time_utils.to_unix_ms(self.updated_at),
            "tags": [tag.to_dict() for tag in self.tags],
            "runs": [run.to_summary() for run in self.runs],
            "subsystems": [subsystem.to_dict() for subsystem in self.subsystems],
            "attachments": [attachment.to_dict() for attachment in self.attachments],
        }
        if replies is not None:
            payload["replies"] = replies
        return payload

    def __repr__(self) -> str:
        return f"<Log {self.id} {self.title!r}>"
