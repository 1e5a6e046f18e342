"""请求 query/payload 的 pydantic schema."""
