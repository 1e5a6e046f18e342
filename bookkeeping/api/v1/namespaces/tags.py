"""Tags namespace."""

from __future__ import annotations

from flask import request
from flask_restx import Namespace, fields

from bookkeeping.api.v1.models.envelope import get_error_envelope_model, make_success_envelope_model
from bookkeeping.api.v1.resources.base import BaseResource
from bookkeeping.api.v1.restx_models.entities import LOG_FIELDS, TAG_FIELDS
from bookkeeping.schemas.common_query import PaginatedListQuery
from bookkeeping.schemas.labels import CreateTagPayload
from bookkeeping.services.tags.tag_read_service import TagReadService
from bookkeeping.services.tags.tag_write_service import TagWriteService

ns = Namespace("tags", description="标签管理")

ErrorEnvelope = get_error_envelope_model(ns)

TagModel = ns.model("Tag", TAG_FIELDS)
LogModel = ns.model("Log", LOG_FIELDS)

TagsListSuccessEnvelope = make_success_envelope_model(
    ns,
    "TagsListSuccessEnvelope",
    TagModel,
    many=True,
    paginated=True,
)
TagSuccessEnvelope = make_success_envelope_model(ns, "TagSuccessEnvelope", TagModel)
TagLogsSuccessEnvelope = make_success_envelope_model(ns, "TagLogsSuccessEnvelope", LogModel, many=True)

TagWritePayload = ns.model(
    "TagWritePayload",
    {
        "text": fields.String(required=True, description="标签文本", example="FLP"),
    },
)

pagination_parser = ns.parser()
pagination_parser.add_argument("page[limit]", type=int, location="args", help="分页大小(1-100, 默认 100)")
pagination_parser.add_argument("page[offset]", type=int, location="args", help="分页偏移(默认 0)")


@ns.route("")
class TagsResource(BaseResource):
    """标签列表资源."""

    @ns.expect(pagination_parser, validate=False)
    @ns.response(200, "OK", TagsListSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def get(self):
        """获取标签列表."""

        def _execute():
            params = self.parse_query(PaginatedListQuery)
            page = TagReadService().list_tags(params)
            return self.paginated([tag.to_dict() for tag in page.tags], page.meta)

        return self.safe_call(
            _execute,
            module="tags",
            action="list_tags",
            public_error="获取标签列表失败",
        )

    @ns.expect(TagWritePayload, validate=False)
    @ns.response(201, "Created", TagSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    @ns.response(409, "Conflict", ErrorEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def post(self):
        """创建标签."""
        raw_payload = request.get_json(silent=True)

        def _execute():
            payload = self.parse_body(CreateTagPayload, raw_payload)
            tag = TagWriteService().create(payload)
            return self.created(tag.to_dict())

        return self.safe_call(
            _execute,
            module="tags",
            action="create_tag",
            public_error="标签创建失败",
        )


@ns.route("/<int:tag_id>")
class TagDetailResource(BaseResource):
    """标签详情资源."""

    @ns.response(200, "OK", TagSuccessEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def get(self, tag_id: int):
        """获取标签详情."""

        def _execute():
            tag = TagReadService().get_tag(tag_id)
            return self.success(data=tag.to_dict())

        return self.safe_call(
            _execute,
            module="tags",
            action="get_tag_by_id",
            public_error="获取标签详情失败",
            context={"tag_id": tag_id},
        )

    @ns.response(200, "OK", TagSuccessEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def delete(self, tag_id: int):
        """删除标签, 返回被删除的标签."""

        def _execute():
            tag = TagWriteService().delete(tag_id)
            return self.success(data=tag.to_dict())

        return self.safe_call(
            _execute,
            module="tags",
            action="delete_tag_by_id",
            public_error="删除标签失败",
            context={"tag_id": tag_id},
        )


@ns.route("/<int:tag_id>/logs")
class TagLogsResource(BaseResource):
    """标签下的日志资源."""

    @ns.response(200, "OK", TagLogsSuccessEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def get(self, tag_id: int):
        """列出挂载该标签的日志."""

        def _execute():
            result = TagReadService().list_logs(tag_id)
            return self.success(data=[log.to_dict(replies=result.replies.get(log.id, 0)) for log in result.logs])

        return self.safe_call(
            _execute,
            module="tags",
            action="get_logs_by_tag_id",
            public_error="获取标签日志失败",
            context={"tag_id": tag_id},
        )
