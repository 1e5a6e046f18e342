"""列表查询构建: 分页、排序与日志筛选编译."""

from .log_filters import compile_log_filter, compile_log_query
from .pagination import build_pagination_meta, resolve_pagination
from .sorting import LOG_SORT_FIELDS, RUN_SORT_FIELDS, resolve_sort

__all__ = [
    "LOG_SORT_FIELDS",
    "RUN_SORT_FIELDS",
    "build_pagination_meta",
    "compile_log_filter",
    "compile_log_query",
    "resolve_pagination",
    "resolve_sort",
]
