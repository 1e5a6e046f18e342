"""子系统相关 Service."""
