"""Bookkeeping - 常量定义模块

统一管理错误分类、严重度与对外文案.
"""

from enum import Enum


class ErrorCategory(Enum):
    """错误分类枚举."""

    VALIDATION = "validation"
    BUSINESS = "business"
    DATABASE = "database"
    DATA_INTEGRITY = "data_integrity"
    SYSTEM = "system"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """错误严重程度枚举."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


# 错误消息常量(对外文案与 API 契约保持英文)
class ErrorMessages:
    """错误消息常量."""

    # 通用错误
    INTERNAL_ERROR = "Internal Server Error"
    VALIDATION_ERROR = "Invalid Attribute"
    RESOURCE_NOT_FOUND = "Not Found"

    # 数据相关错误
    CONSTRAINT_VIOLATION = "Conflict"
    DATA_INTEGRITY_VIOLATION = "Data integrity violation"

    # 业务实体
    ENTITY_NOT_FOUND = "{entity} with this id ({entity_id}) could not be found"
    RUN_NUMBER_NOT_FOUND = "Run with this run number ({run_number}) could not be found"
    ENTITY_ALREADY_EXISTS = "The provided entity already exists"
