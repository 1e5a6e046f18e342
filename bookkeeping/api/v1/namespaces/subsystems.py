"""Subsystems namespace."""

from __future__ import annotations

from flask import request
from flask_restx import Namespace, fields

from bookkeeping.api.v1.models.envelope import get_error_envelope_model, make_success_envelope_model
from bookkeeping.api.v1.resources.base import BaseResource
from bookkeeping.api.v1.restx_models.entities import SUBSYSTEM_FIELDS
from bookkeeping.schemas.common_query import PaginatedListQuery
from bookkeeping.schemas.labels import CreateSubsystemPayload
from bookkeeping.services.subsystems.subsystem_read_service import SubsystemReadService
from bookkeeping.services.subsystems.subsystem_write_service import SubsystemWriteService

ns = Namespace("subsystems", description="子系统")

ErrorEnvelope = get_error_envelope_model(ns)

SubsystemModel = ns.model("Subsystem", SUBSYSTEM_FIELDS)
SubsystemsListSuccessEnvelope = make_success_envelope_model(
    ns,
    "SubsystemsListSuccessEnvelope",
    SubsystemModel,
    many=True,
    paginated=True,
)
SubsystemSuccessEnvelope = make_success_envelope_model(ns, "SubsystemSuccessEnvelope", SubsystemModel)

SubsystemWritePayload = ns.model(
    "SubsystemWritePayload",
    {
        "text": fields.String(required=True, description="子系统名称", example="TPC"),
    },
)

pagination_parser = ns.parser()
pagination_parser.add_argument("page[limit]", type=int, location="args", help="分页大小(1-100, 默认 100)")
pagination_parser.add_argument("page[offset]", type=int, location="args", help="分页偏移(默认 0)")


@ns.route("")
class SubsystemsResource(BaseResource):
    """子系统列表资源."""

    @ns.expect(pagination_parser, validate=False)
    @ns.response(200, "OK", SubsystemsListSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def get(self):
        """获取子系统列表."""

        def _execute():
            params = self.parse_query(PaginatedListQuery)
            page = SubsystemReadService().list_subsystems(params)
            return self.paginated([subsystem.to_dict() for subsystem in page.subsystems], page.meta)

        return self.safe_call(
            _execute,
            module="subsystems",
            action="list_subsystems",
            public_error="获取子系统列表失败",
        )

    @ns.expect(SubsystemWritePayload, validate=False)
    @ns.response(201, "Created", SubsystemSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    @ns.response(409, "Conflict", ErrorEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def post(self):
        """创建子系统."""
        raw_payload = request.get_json(silent=True)

        def _execute():
            payload = self.parse_body(CreateSubsystemPayload, raw_payload)
            subsystem = SubsystemWriteService().create(payload)
            return self.created(subsystem.to_dict())

        return self.safe_call(
            _execute,
            module="subsystems",
            action="create_subsystem",
            public_error="创建子系统失败",
        )


@ns.route("/<int:subsystem_id>")
class SubsystemDetailResource(BaseResource):
    """子系统详情资源."""

    @ns.response(200, "OK", SubsystemSuccessEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def get(self, subsystem_id: int):
        """获取子系统详情."""

        def _execute():
            subsystem = SubsystemReadService().get_subsystem(subsystem_id)
            return self.success(data=subsystem.to_dict())

        return self.safe_call(
            _execute,
            module="subsystems",
            action="get_subsystem",
            public_error="获取子系统详情失败",
            context={"subsystem_id": subsystem_id},
        )

    @ns.response(200, "OK", SubsystemSuccessEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def delete(self, subsystem_id: int):
        """删除子系统, 返回被删除的子系统."""

        def _execute():
            subsystem = SubsystemWriteService().delete(subsystem_id)
            return self.success(data=subsystem.to_dict())

        return self.safe_call(
            _execute,
            module="subsystems",
            action="delete_subsystem",
            public_error="删除子系统失败",
            context={"subsystem_id": subsystem_id},
        )
