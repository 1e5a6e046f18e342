"""Schema 基础设施."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class PayloadSchema(BaseModel):
    """写路径 payload 的基础 schema.

    约定:
    - 默认忽略未知字段, 以兼容客户端的扩展字段.
    - 字段使用 camelCase 别名接收(与对外 JSON 一致), 内部使用 snake_case.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class QuerySchema(BaseModel):
    """读路径 query 参数的基础 schema.

    约定:
    - 默认拒绝未知字段,避免"拼错参数却被静默忽略"的隐患.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)
