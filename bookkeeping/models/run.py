"""
Bookkeeping - Run 模型
"""

from bookkeeping import db
from bookkeeping.constants.entity_types import RunQuality, RunType
from bookkeeping.utils.time_utils import time_utils


class Run(db.Model):
    """Run 模型.

    一次数据采集会话. 在本 API 范围内创建后不可修改.

    Attributes:
        run_number: Run 编号,唯一.
        time_o2_start / time_o2_end: O2 时钟的开始/结束时间.
        time_trg_start / time_trg_end: 触发器时钟的开始/结束时间.
        activity_id: 关联的活动标识.
        run_type: physics/cosmics/technical.
        run_quality: good/bad/unknown.
        n_detectors / n_flps / n_epns / n_subtimeframes: 计数器.
        bytes_read_out: 读出字节数.
    """

    __tablename__ = "runs"

    id = db.Column(db.Integer, primary_key=True)
    run_number = db.Column(db.Integer, nullable=False, unique=True, index=True)
    time_o2_start = db.Column(db.DateTime(timezone=True), nullable=True)
    time_o2_end = db.Column(db.DateTime(timezone=True), nullable=True)
    time_trg_start = db.Column(db.DateTime(timezone=True), nullable=True)
    time_trg_end = db.Column(db.DateTime(timezone=True), nullable=True)
    activity_id = db.Column(db.String(64), nullable=True)
    run_type = db.Column(db.String(20), nullable=True)
    run_quality = db.Column(db.String(20), nullable=False, default=RunQuality.UNKNOWN)
    n_detectors = db.Column(db.Integer, nullable=True)
    n_flps = db.Column(db.Integer, nullable=True)
    n_epns = db.Column(db.Integer, nullable=True)
    n_subtimeframes = db.Column(db.Integer, nullable=True)
    bytes_read_out = db.Column(db.BigInteger, nullable=True)
    created_at = db.Column(db.DateTime(timezone=True), default=time_utils.now, nullable=False)
    updated_at = db.Column(db.DateTime(timezone=True), default=time_utils.now, onupdate=time_utils.now, nullable=False)

    __table_args__ = (
        db.CheckConstraint(
            "run_quality IN ('" + "','".join(RunQuality.ALL) + "')",
            name="ck_runs_run_quality",
        ),
        db.CheckConstraint(
            "run_type IS NULL OR run_type IN ('" + "','".join(RunType.ALL) + "')",
            name="ck_runs_run_type",
        ),
    )

    logs = db.relationship("Log", secondary="log_runs", back_populates="runs", lazy="select")

    def to_dict(self) -> dict:
        """转换为对外 camelCase 字典."""
        return {
            "id": self.id,
            "runNumber": self.run_number,
            "timeO2Start": time_utils.to_unix_ms(self.time_o2_start),
            "timeO2End": time_utils.to_unix_ms(self.time_o2_end),
            "timeTrgStart": time_utils.to_unix_ms(self.time_trg_start),
            "timeTrgEnd": time_utils.to_unix_ms(self.time_trg_end),
            "activityId": self.activity_id,
            "runType": self.run_type,
            "runQuality": self.run_quality,
            "nDetectors": self.n_detectors,
            "nFlps": self.n_flps,
            "nEpns": self.n_epns,
            "nSubtimeframes": self.n_subtimeframes,
            "bytesReadOut": self.bytes_read_out,
        }

    def to_summary(self) -> dict:
        """日志中嵌入的精简 Run 结构."""
        return {"id": self.id, "runNumber": self.run_number}

    def __repr__(self) -> str:
        return f"<Run {self.run_number}>"
