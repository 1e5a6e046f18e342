"""Run 相关 Service."""
