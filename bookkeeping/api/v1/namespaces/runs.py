"""Runs namespace(只读)."""

from __future__ import annotations

from flask_restx import Namespace

from bookkeeping.api.v1.models.envelope import get_error_envelope_model, make_success_envelope_model
from bookkeeping.api.v1.resources.base import BaseResource
from bookkeeping.api.v1.restx_models.entities import RUN_FIELDS
from bookkeeping.schemas.common_query import RunsListQuery
from bookkeeping.services.runs.run_read_service import RunReadService

ns = Namespace("runs", description="Run 元数据")

ErrorEnvelope = get_error_envelope_model(ns)

RunModel = ns.model("Run", RUN_FIELDS)
RunsListSuccessEnvelope = make_success_envelope_model(
    ns,
    "RunsListSuccessEnvelope",
    RunModel,
    many=True,
    paginated=True,
)
RunSuccessEnvelope = make_success_envelope_model(ns, "RunSuccessEnvelope", RunModel)

runs_list_parser = ns.parser()
runs_list_parser.add_argument("page[limit]", type=int, location="args", help="分页大小(1-100, 默认 100)")
runs_list_parser.add_argument("page[offset]", type=int, location="args", help="分页偏移(默认 0)")
runs_list_parser.add_argument("sort[id]", type=str, location="args", choices=("asc", "desc"))


@ns.route("")
class RunsResource(BaseResource):
    """Run 列表资源."""

    @ns.expect(runs_list_parser, validate=False)
    @ns.response(200, "OK", RunsListSuccessEnvelope)
    @ns.response(400, "Bad Request", ErrorEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def get(self):
        """获取 Run 列表."""

        def _execute():
            params = self.parse_query(RunsListQuery)
            page = RunReadService().list_runs(params)
            return self.paginated([run.to_dict() for run in page.runs], page.meta)

        return self.safe_call(
            _execute,
            module="runs",
            action="list_runs",
            public_error="获取 Run 列表失败",
        )


@ns.route("/<int:run_id>")
class RunDetailResource(BaseResource):
    """Run 详情资源."""

    @ns.response(200, "OK", RunSuccessEnvelope)
    @ns.response(404, "Not Found", ErrorEnvelope)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def get(self, run_id: int):
        """获取 Run 详情."""

        def _execute():
            run = RunReadService().get_run(run_id)
            return self.success(data=run.to_dict())

        return self.safe_call(
            _execute,
            module="runs",
            action="get_run_by_id",
            public_error="获取 Run 详情失败",
            context={"run_id": run_id},
        )
