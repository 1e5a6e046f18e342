"""Logs namespace."""

from __future__ import annotations

from flask import request
from flask_restx import Namespace, fields

from bookkeeping.api.v1.models.envelope import get_error_envelope_model, make_success_envelope_model
from bookkeeping.api.v1.resources.base import BaseResource
from bookkeeping.api.v1.restx_models.entities import ATTACHMENT_FIELDS, LOG_FIELDS, TAG_FIELDS
from bookkeeping.schemas.logs import CreateLogPayload
from bookkeeping.schemas.logs_query import LogsListQuery
from bookkeeping.services.attachments.attachment_service import AttachmentService
from bookkeeping.services.logs.log_detail_read_service import LogDetailReadService
from bookkeeping.services.logs.log_list_service import LogListService
from bookkeeping.services.logs.log_tree_service import LogTreeService, log_tree_to_dict
from bookkeeping.services.logs.log_write_service import LogWriteService

ns = Namespace("logs", description="日志")

ErrorEnvelope = get_error_envelope_model(ns)

LogModel = ns.model("Log", LOG_FIELDS)
TagModel = ns.model("Tag", TAG_FIELDS)
AttachmentModel = ns.model("Attachment", ATTACHMENT_FIELDS)
LogTreeModel = ns.clone("LogTree", LogModel, {"children": fields.List(fields.Raw, description="子日志树")})

LogsListSuccessEnvelope = make_success_envelope_model(
    ns,
    "LogsListSuccessEnvelope",
    LogModel,
    many=True,
    paginated=True,
)
LogSuccessEnvelope = make_success_envelope_model(ns, "LogSuccessEnvelope", LogModel)
LogTreeSuccessEnvelope = make_success_envelope_model(ns, "LogTreeSuccessEnvelope", LogTreeModel)
LogTagsSuccessEnvelope = make_success_envelope_model(ns, "LogTagsSuccessEnvelope", TagModel, many=True)
LogAttachmentsSuccessEnvelope = make_success_envelope_model(
    ns,
    "LogAttachmentsSuccessEnvelope",
    AttachmentModel,
    many=True,
)
LogAttachmentSuccessEnvelope = make_success_envelope_model(ns, "LogAttachmentSuccessEnvelope", AttachmentModel)

AttachmentWritePayload = ns.model(
    "LogAttachmentWritePayload",
    {
        "fileName": fields.String(required=True, example="1562934400_shift.png"),
        "size": fields.Integer(required=True, example=2048),
        "mimeType": fields.String(required=True, example="image/png"),
        "originalName": fields.String(required=True, example="shift.png"),
        "path": fields.String(required=True, example="/var/storage/1562934400_shift.png"),
        "encoding": fields.String(required=True, example="7bit"),
    },
)

LogWritePayload = ns.model(
    "LogWritePayload",
    {
        "title": fields.String(required=True, description="标题(3-140 字符)", example="Shift summary"),
        "text": fields.String(required=True, description="正文(至少 3 字符)", example="Beam dump at 02:14"),
        "parentLogId": fields.Integer(required=False, description="父日志 ID(回复时必填)", example=1),
        "runNumbers": fields.List(fields.Integer, required=False, description="关联 Run 编号", example=[1, 2]),
        "tags": fields.List(fields.Integer, required=False, description="标签 ID 列表", example=[1]),
        "attachments": fields.List(fields.Nested(AttachmentWritePayload), required=False, description="附件元数据"),
    },
)

logs_list_parser = ns.parser()
logs_list_parser.add_argument("page[limit]", type=int, location="args", help="分页大小(1-100, 默认 100)")
logs_list_parser.add_argument("page[offset]", type=int, location="args", help="分页偏移(默认 0)")
logs_list_parser.add_argument("filter[author]", type=str, location="args", help="作者名(模糊匹配)")
logs_list_parser.add_argument("filter[title]", type=str, location="args", help="标题(模糊匹配, 3-140 字符)")
logs_list_parser.add_argument("filter[created][from]", type=int, location="args", help="创建时间下限(Unix 毫秒)")
logs_list_parser.add_argument("filter[created][to]", type=int, location="args", help="创建时间上限(Unix 毫秒)")
logs_list_parser.add_argument("filter[tag][values]", type=str, location="args", help="标签 ID, 逗号分隔")
logs_list_parser.add_argument("filter[tag][operation]", type=str, location="args", choices=("and", "or"))
logs_list_parser.add_argument("filter[origin]", type=str, location="args", choices=("human", "process"))
logs_list_parser.add_argument("filter[parentLog]", type=int, location="args")
logs_list_parser.add_argument("filter[rootLog]", type=int, location="args")
logs_list_parser.add_argument("sort[createdAt]", type=str, location="args", choices=("asc", "desc"))


@ns.route("")
class LogsResource(BaseResource):
    """日志列表资源."""

    @ns.expect(logs_list_parser, validate=False)
    @ns.response(200, "OK", LogsListSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def get(self):
        """获取日志列表(分页、筛选、排序)."""

        def _execute():
            params = self.parse_query(LogsListQuery)
            page = LogListService().list_logs(params)
            return self.paginated(
                [log.to_dict(replies=page.replies.get(log.id, 0)) for log in page.logs],
                page.meta,
            )

        return self.safe_call(
            _execute,
            module="logs",
            action="list_logs",
            public_error="获取日志列表失败",
            context={"query": request.query_string.decode("utf-8", errors="replace")},
        )

    @ns.expect(LogWritePayload, validate=False)
    @ns.response(201, "Created", LogSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def post(self):
        """创建日志(或回复)."""
        raw_payload = request.get_json(silent=True)

        def _execute():
            payload = self.parse_body(CreateLogPayload, raw_payload)
            log = LogWriteService().create(payload)
            return self.created(log.to_dict(replies=0))

        return self.safe_call(
            _execute,
            module="logs",
            action="create_log",
            public_error="创建日志失败",
        )


@ns.route("/<int:log_id>")
class LogDetailResource(BaseResource):
    """日志详情资源."""

    @ns.response(200, "OK", LogSuccessEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def get(self, log_id: int):
        """获取日志详情."""

        def _execute():
            detail = LogDetailReadService().get_log(log_id)
            return self.success(data=detail.log.to_dict(replies=detail.replies))

        return self.safe_call(
            _execute,
            module="logs",
            action="get_log_by_id",
            public_error="获取日志详情失败",
            context={"log_id": log_id},
        )


@ns.route("/<int:log_id>/tree")
class LogTreeResource(BaseResource):
    """日志树资源."""

    @ns.response(200, "OK", LogTreeSuccessEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def get(self, log_id: int):
        """获取日志所在线程的完整树."""

        def _execute():
            tree = LogTreeService().get_tree(log_id)
            return self.success(data=log_tree_to_dict(tree))

        return self.safe_call(
            _execute,
            module="logs",
            action="get_log_tree",
            public_error="获取日志树失败",
            context={"log_id": log_id},
        )


@ns.route("/<int:log_id>/tags")
class LogTagsResource(BaseResource):
    """日志标签资源."""

    @ns.response(200, "OK", LogTagsSuccessEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def get(self, log_id: int):
        """列出日志挂载的标签."""

        def _execute():
            tags = LogDetailReadService().list_tags(log_id)
            return self.success(data=[tag.to_dict() for tag in tags])

        return self.safe_call(
            _execute,
            module="logs",
            action="list_tags_by_log_id",
            public_error="获取日志标签失败",
            context={"log_id": log_id},
        )


@ns.route("/<int:log_id>/attachments")
class LogAttachmentsResource(BaseResource):
    """日志附件列表资源."""

    @ns.response(200, "OK", LogAttachmentsSuccessEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def get(self, log_id: int):
        """列出日志的附件."""

        def _execute():
            attachments = AttachmentService().list_by_log(log_id)
            return self.success(data=[attachment.to_dict() for attachment in attachments])

        return self.safe_call(
            _execute,
            module="logs",
            action="list_log_attachments",
            public_error="获取日志附件失败",
            context={"log_id": log_id},
        )


@ns.route("/<int:log_id>/attachments/<int:attachment_id>")
class LogAttachmentResource(BaseResource):
    """日志单个附件资源."""

    @ns.response(200, "OK", LogAttachmentSuccessEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def get(self, log_id: int, attachment_id: int):
        """获取日志的单个附件."""

        def _execute():
            attachment = AttachmentService().get_log_attachment(log_id, attachment_id)
            return self.success(data=attachment.to_dict())

        return self.safe_call(
            _execute,
            module="logs",
            action="get_log_attachment",
            public_error="获取日志附件失败",
            context={"log_id": log_id, "attachment_id": attachment_id},
        )
