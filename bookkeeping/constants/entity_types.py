"""业务实体枚举常量.

定义日志、Run 与排序相关的取值,避免魔法字符串.
"""

from typing import ClassVar


class LogOrigin:
    """日志来源常量."""

    HUMAN = "human"  # 人工录入
    PROCESS = "process"  # 自动化流程

    ALL: ClassVar[tuple[str, ...]] = (HUMAN, PROCESS)


class LogSubtype:
    """日志子类型常量."""

    RUN = "run"
    SUBSYSTEM = "subsystem"
    ANNOUNCEMENT = "announcement"
    INTERVENTION = "intervention"
    COMMENT = "comment"

    ALL: ClassVar[tuple[str, ...]] = (RUN, SUBSYSTEM, ANNOUNCEMENT, INTERVENTION, COMMENT)


class RunQuality:
    """Run 质量常量."""

    GOOD = "good"
    BAD = "bad"
    UNKNOWN = "unknown"

    ALL: ClassVar[tuple[str, ...]] = (GOOD, BAD, UNKNOWN)


class RunType:
    """Run 类型常量."""

    PHYSICS = "physics"
    COSMICS = "cosmics"
    TECHNICAL = "technical"

    ALL: ClassVar[tuple[str, ...]] = (PHYSICS, COSMICS, TECHNICAL)


class SortDirection:
    """排序方向常量."""

    ASC = "asc"
    DESC = "desc"

    ALL: ClassVar[tuple[str, ...]] = (ASC, DESC)
