"""日志相关 Service."""
