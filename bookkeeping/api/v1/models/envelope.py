"""OpenAPI: JSON Envelope Models.

说明:
- 仅用于文档表达; 实际响应以 `jsonify_unified_success` / 全局错误处理器为准.
"""

from __future__ import annotations

from flask_restx import Namespace, fields


def get_error_envelope_model(ns: Namespace):
    """注册/获取错误封套 Model."""
    model_name = "ErrorEnvelope"
    if model_name in ns.models:
        return ns.models[model_name]

    error_source = ns.model(
        "ErrorSource",
        {
            "pointer": fields.String(description="出错字段的 JSON pointer", example="/data/attributes/query/page/limit"),
        },
    )
    error_item = ns.model(
        "ErrorItem",
        {
            "status": fields.String(required=True, description="HTTP 状态码", example="400"),
            "title": fields.String(required=True, description="错误摘要", example="Invalid Attribute"),
            "detail": fields.String(
                required=False,
                description="错误详情(可选)",
                example='"query.page.limit" must be less than or equal to 100',
            ),
            "source": fields.Nested(error_source, required=False, description="出错位置(可选)"),
        },
    )
    return ns.model(
        model_name,
        {
            "errors": fields.List(fields.Nested(error_item), required=True, description="错误列表"),
        },
    )


def get_page_meta_model(ns: Namespace):
    """注册/获取分页元数据 Model."""
    model_name = "PaginationMeta"
    if model_name in ns.models:
        return ns.models[model_name]

    page = ns.model(
        "PageMeta",
        {
            "pageCount": fields.Integer(description="总页数", example=3),
            "totalCount": fields.Integer(description="总记录数", example=250),
        },
    )
    return ns.model(model_name, {"page": fields.Nested(page)})


def make_success_envelope_model(ns: Namespace, name: str, data_model=None, *, many: bool = False, paginated: bool = False):
    """构建成功封套 Model.

    Args:
        ns: 所属 namespace.
        name: Model 名称.
        data_model: ``data`` 字段的 Model, 为空时使用 Raw.
        many: ``data`` 是否为列表.
        paginated: 是否附带 ``meta.page``.

    """
    if data_model is None:
        data_field: fields.Raw = fields.Raw(required=True, description="响应数据", example={})
    elif many:
        data_field = fields.List(fields.Nested(data_model), required=True, description="响应数据")
    else:
        data_field = fields.Nested(data_model, required=True, description="响应数据")

    envelope_fields: dict[str, fields.Raw] = {"data": data_field}
    if paginated:
        envelope_fields["meta"] = fields.Nested(get_page_meta_model(ns), required=True, description="分页元数据")
    return ns.model(name, envelope_fields)
