"""常量模块。

集中管理系统常量，包括错误消息、HTTP 状态码、实体枚举与校验阈值。

主要常量：
- ErrorMessages: 错误消息常量
- HttpStatus: HTTP 状态码常量
- LogOrigin / LogSubtype: 日志来源与子类型
- RunQuality / RunType: Run 质量与类型
"""

# 导入HTTP状态码常量（使用Python标准库）
from http import HTTPStatus as HttpStatus

from .entity_types import LogOrigin, LogSubtype, RunQuality, RunType, SortDirection
from .system_constants import ErrorCategory, ErrorMessages, ErrorSeverity

__all__ = [
    "ErrorCategory",
    "ErrorMessages",
    "ErrorSeverity",
    "HttpStatus",
    "LogOrigin",
    "LogSubtype",
    "RunQuality",
    "RunType",
    "SortDirection",
]
