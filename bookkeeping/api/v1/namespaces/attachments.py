"""Attachments namespace(仅元数据, 不处理文件上传)."""

from __future__ import annotations

from flask import request
from flask_restx import Namespace, fields

from bookkeeping.api.v1.models.envelope import get_error_envelope_model, make_success_envelope_model
from bookkeeping.api.v1.resources.base import BaseResource
from bookkeeping.api.v1.restx_models.entities import ATTACHMENT_FIELDS
from bookkeeping.schemas.attachments import CreateAttachmentsPayload
from bookkeeping.services.attachments.attachment_service import AttachmentService

ns = Namespace("attachments", description="附件")

ErrorEnvelope = get_error_envelope_model(ns)

AttachmentModel = ns.model("Attachment", ATTACHMENT_FIELDS)
AttachmentsSuccessEnvelope = make_success_envelope_model(ns, "AttachmentsSuccessEnvelope", AttachmentModel, many=True)
AttachmentSuccessEnvelope = make_success_envelope_model(ns, "AttachmentSuccessEnvelope", AttachmentModel)

AttachmentWriteItem = ns.model(
    "AttachmentWriteItem",
    {
        "fileName": fields.String(required=True, example="1562934400_shift.png"),
        "size": fields.Integer(required=True, example=2048),
        "mimeType": fields.String(required=True, example="image/png"),
        "originalName": fields.String(required=True, example="shift.png"),
        "path": fields.String(required=True, example="/var/storage/1562934400_shift.png"),
        "encoding": fields.String(required=True, example="7bit"),
        "logId": fields.Integer(required=True, example=1),
    },
)
AttachmentsWritePayload = ns.model(
    "AttachmentsWritePayload",
    {
        "attachments": fields.List(fields.Nested(AttachmentWriteItem), required=True, description="附件元数据列表"),
    },
)


@ns.route("")
class AttachmentsResource(BaseResource):
    """附件创建资源."""

    @ns.expect(AttachmentsWritePayload, validate=False)
    @ns.response(201, "Created", AttachmentsSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def post(self):
        """批量创建附件元数据."""
        raw_payload = request.get_json(silent=True)

        def _execute():
            payload = self.parse_body(CreateAttachmentsPayload, raw_payload)
            attachments = AttachmentService().create(payload)
            return self.created([attachment.to_dict() for attachment in attachments])

        return self.safe_call(
            _execute,
            module="attachments",
            action="create_attachment",
            public_error="创建附件失败",
        )


@ns.route("/<int:attachment_id>")
class AttachmentDetailResource(BaseResource):
    """附件详情资源."""

    @ns.response(200, "OK", AttachmentSuccessEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def get(self, attachment_id: int):
        """获取附件详情."""

        def _execute():
            attachment = AttachmentService().get_attachment(attachment_id)
            return self.success(data=attachment.to_dict())

        return self.safe_call(
            _execute,
            module="attachments",
            action="get_attachment",
            public_error="获取附件失败",
            context={"attachment_id": attachment_id},
        )
