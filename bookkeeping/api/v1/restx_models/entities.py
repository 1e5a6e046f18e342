"""实体序列化模型(Flask-RESTX fields)."""

from __future__ import annotations

from flask_restx import fields

USER_FIELDS = {
    "id": fields.Integer(description="用户 ID", example=1),
    "externalId": fields.Integer(description="外部用户 ID", example=0),
    "name": fields.String(description="用户名", example="Anonymous"),
}

TAG_FIELDS = {
    "id": fields.Integer(description="标签 ID", example=1),
    "text": fields.String(description="标签文本", example="FLP"),
    "createdAt": fields.Integer(description="创建时间(Unix 毫秒)", example=1565262000000),
    "updatedAt": fields.Integer(description="更新时间(Unix 毫秒)", example=1565262000000),
}

SUBSYSTEM_FIELDS = {
    "id": fields.Integer(description="子系统 ID", example=1),
    "name": fields.String(description="子系统名称", example="TPC"),
    "createdAt": fields.Integer(description="创建时间(Unix 毫秒)", example=1565262000000),
    "updatedAt": fields.Integer(description="更新时间(Unix 毫秒)", example=1565262000000),
}

ATTACHMENT_FIELDS = {
    "id": fields.Integer(description="附件 ID", example=1),
    "fileName": fields.String(description="存储文件名", example="1562934400_shift.png"),
    "size": fields.Integer(description="文件大小(字节)", example=2048),
    "mimeType": fields.String(description="MIME 类型", example="image/png"),
    "originalName": fields.String(description="原始文件名", example="shift.png"),
    "path": fields.String(description="存储路径", example="/var/storage/1562934400_shift.png"),
    "encoding": fields.String(description="编码", example="7bit"),
    "logId": fields.Integer(description="所属日志 ID", example=1),
    "createdAt": fields.Integer(description="创建时间(Unix 毫秒)", example=1565262000000),
    "updatedAt": fields.Integer(description="更新时间(Unix 毫秒)", example=1565262000000),
}

RUN_SUMMARY_FIELDS = {
    "id": fields.Integer(description="Run ID", example=1),
    "runNumber": fields.Integer(description="Run 编号", example=1),
}

RUN_FIELDS = {
    **RUN_SUMMARY_FIELDS,
    "timeO2Start": fields.Integer(description="O2 开始时间(Unix 毫秒)", example=1565262000000),
    "timeO2End": fields.Integer(description="O2 结束时间(Unix 毫秒)", example=1565265600000),
    "timeTrgStart": fields.Integer(description="触发开始时间(Unix 毫秒)", example=1565262000000),
    "timeTrgEnd": fields.Integer(description="触发结束时间(Unix 毫秒)", example=1565265600000),
    "activityId": fields.String(description="活动 ID", example="Sl4e12ofb83no92ns"),
    "runType": fields.String(description="Run 类型", enum=["physics", "cosmics", "technical"], example="physics"),
    "runQuality": fields.String(description="Run 质量", enum=["good", "bad", "unknown"], example="good"),
    "nDetectors": fields.Integer(description="探测器数量", example=3),
    "nFlps": fields.Integer(description="FLP 数量", example=10),
    "nEpns": fields.Integer(description="EPN 数量", example=10),
    "nSubtimeframes": fields.Integer(description="子时间帧数量", example=12312),
    "bytesReadOut": fields.Integer(description="读出字节数", example=99999999999),
}

LOG_FIELDS = {
    "id": fields.Integer(description="日志 ID", example=1),
    "title": fields.String(description="标题", example="Shift summary"),
    "text": fields.String(description="正文", example="Beam dump at 02:14"),
    "author": fields.Nested(USER_FIELDS, description="作者"),
    "origin": fields.String(description="来源", enum=["human", "process"], example="human"),
    "subtype": fields.String(
        description="子类型",
        enum=["run", "subsystem", "announcement", "intervention", "comment"],
        example="run",
    ),
    "parentLogId": fields.Integer(description="父日志 ID(根日志为空)", example=None),
    "rootLogId": fields.Integer(description="根日志 ID", example=1),
    "createdAt": fields.Integer(description="创建时间(Unix 毫秒)", example=1565262000000),
    "updatedAt": fields.Integer(description="更新时间(Unix 毫秒)", example=1565262000000),
    "replies": fields.Integer(description="回复(后代)数量", example=2),
    "tags": fields.List(fields.Nested(TAG_FIELDS), description="标签"),
    "runs": fields.List(fields.Nested(RUN_SUMMARY_FIELDS), description="关联 Run"),
    "subsystems": fields.List(fields.Nested(SUBSYSTEM_FIELDS), description="关联子系统"),
    "attachments": fields.List(fields.Nested(ATTACHMENT_FIELDS), description="附件"),
}
