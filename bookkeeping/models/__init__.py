"""数据模型模块.

定义所有数据库模型.

主要模型:
- User: 日志作者
- Log: 日志条目(支持回复形成线程)
- Tag: 标签
- Run: 数据采集 Run
- Subsystem: 子系统
- Attachment: 日志附件元数据
"""

from bookkeeping.models.attachment import Attachment
from bookkeeping.models.log import Log, log_runs, log_subsystems, log_tags
from bookkeeping.models.run import Run
from bookkeeping.models.subsystem import Subsystem
from bookkeeping.models.tag import Tag
from bookkeeping.models.user import User

__all__ = [
    "Attachment",
    "Log",
    "Run",
    "Subsystem",
    "Tag",
    "User",
    "log_runs",
    "log_subsystems",
    "log_tags",
]
