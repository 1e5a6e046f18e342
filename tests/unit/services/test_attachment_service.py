import pytest

from bookkeeping.core.exceptions import NotFoundError
from bookkeeping.schemas.attachments import CreateAttachmentsPayload
from bookkeeping.services.attachments.attachment_service import AttachmentService


def _payload(*log_ids: int) -> CreateAttachmentsPayload:
    return CreateAttachmentsPayload.model_validate(
        {
            "attachments": [
                {
                    "fileName": f"file_{index}.txt",
                    "size": 10 * index,
                    "mimeType": "text/plain",
                    "originalName": f"file_{index}.txt",
                    "path": f"/var/storage/file_{index}.txt",
                    "encoding": "7bit",
                    "logId": log_id,
                }
                for index, log_id in enumerate(log_ids, start=1)
            ],
        },
    )


@pytest.mark.unit
def test_create_attachments_for_several_logs(log_factory) -> None:
    first = log_factory.create("First log")
    second = log_factory.create("Second log")

    attachments = AttachmentService().create(_payload(first.id, second.id, first.id))

    assert [attachment.log_id for attachment in attachments] == [first.id, second.id, first.id]
    assert [attachment.id for attachment in AttachmentService().list_by_log(first.id)] == [
        attachments[0].id,
        attachments[2].id,
    ]


@pytest.mark.unit
def test_create_attachments_fails_when_any_log_missing(log_factory) -> None:
    log = log_factory.create("Only log")

    with pytest.raises(NotFoundError) as excinfo:
        AttachmentService().create(_payload(log.id, 404))

    assert str(excinfo.value) == "Log with this id (404) could not be found"


@pytest.mark.unit
def test_get_log_attachment_rejects_attachment_of_other_log(log_factory) -> None:
    owner = log_factory.create("Owner")
    other = log_factory.create("Other")
    attachment = AttachmentService().create(_payload(owner.id))[0]

    assert AttachmentService().get_log_attachment(owner.id, attachment.id) is attachment
    with pytest.raises(NotFoundError):
        AttachmentService().get_log_attachment(other.id, attachment.id)
