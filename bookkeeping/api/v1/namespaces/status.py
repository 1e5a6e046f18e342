"""Status namespace: 部署信息(启动时间与运行时长)."""

from __future__ import annotations

from flask_restx import Namespace, fields

from bookkeeping import app_start_time
from bookkeeping.api.v1.models.envelope import get_error_envelope_model
from bookkeeping.api.v1.resources.base import BaseResource
from bookkeeping.constants import HttpStatus
from bookkeeping.utils.time_utils import time_utils

ns = Namespace("status", description="部署信息")

ErrorEnvelope = get_error_envelope_model(ns)

DeployInformationModel = ns.model(
    "DeployInformation",
    {
        "age": fields.Float(description="运行时长(秒)", example=3600.5),
        "start": fields.Integer(description="启动时间(Unix 毫秒)", example=1565262000000),
    },
)


def build_deploy_information() -> dict[str, float | int]:
    """基于应用启动时间计算部署信息."""
    age = (time_utils.now() - app_start_time).total_seconds()
    return {"age": round(age, 3), "start": time_utils.to_unix_ms(app_start_time)}


@ns.route("")
class StatusResource(BaseResource):
    """部署状态资源."""

    @ns.response(200, "OK", DeployInformationModel)
    @ns.response(500, "Internal Server Error", ErrorEnvelope)
    def get(self):
        """获取部署信息(未包裹 data)."""
        return build_deploy_information(), HttpStatus.OK
