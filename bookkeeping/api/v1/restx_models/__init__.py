"""RestX 序列化字段定义(仅用于 OpenAPI 文档)."""
