"""标签相关 Service."""
