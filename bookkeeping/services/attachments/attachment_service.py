"""附件 Service.

附件只记录元数据(文件名、大小、MIME 类型、存储路径), 不处理文件上传.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bookkeeping.core.exceptions import NotFoundError
from bookkeeping.models.attachment import Attachment
from bookkeeping.repositories.attachments_repository import AttachmentsRepository
from bookkeeping.repositories.logs_repository import LogsRepository
from bookkeeping.utils.structlog_config import log_info

if TYPE_CHECKING:
    from bookkeeping.schemas.attachments import CreateAttachmentsPayload


class AttachmentService:
    """附件读写服务."""

    def __init__(
        self,
        repository: AttachmentsRepository | None = None,
        *,
        logs_repository: LogsRepository | None = None,
    ) -> None:
        self._repository = repository or AttachmentsRepository()
        self._logs_repository = logs_repository or LogsRepository()

    def _require_log(self, log_id: int) -> None:
        if self._logs_repository.get_log(log_id) is None:
            raise NotFoundError.for_entity("Log", log_id)

    def create(self, payload: CreateAttachmentsPayload) -> list[Attachment]:
        """批量创建附件, 任一所属日志不存在则整体失败."""
        for log_id in dict.fromkeys(item.log_id for item in payload.attachments):
            self._require_log(log_id)

        attachments = [
            Attachment(
                file_name=item.file_name,
                size=item.size,
                mime_type=item.mime_type,
                original_name=item.original_name,
                path=item.path,
                encoding=item.encoding,
                log_id=item.log_id,
            )
            for item in payload.attachments
        ]
        self._repository.add_all(attachments)
        log_info(
            "附件创建成功",
            module="attachments",
            attachment_ids=[attachment.id for attachment in attachments],
        )
        return attachments

    def get_attachment(self, attachment_id: int) -> Attachment:
        attachment = self._repository.get_attachment(attachment_id)
        if attachment is None:
            raise NotFoundError.for_entity("Attachment", attachment_id)
        return attachment

    def list_by_log(self, log_id: int) -> list[Attachment]:
        self._require_log(log_id)
        return self._repository.list_by_log(log_id)

    def get_log_attachment(self, log_id: int, attachment_id: int) -> Attachment:
        """获取属于指定日志的附件; 附件属于其他日志时同样视为不存在."""
        self._require_log(log_id)
        attachment = self._repository.get_attachment(attachment_id)
        if attachment is None or attachment.log_id != log_id:
            raise NotFoundError.for_entity("Attachment", attachment_id)
        return attachment
