import pytest

from bookkeeping.core.exceptions import ValidationError
from bookkeeping.schemas.attachments import CreateAttachmentsPayload
from bookkeeping.schemas.labels import CreateSubsystemPayload, CreateTagPayload
from bookkeeping.schemas.logs import CreateLogPayload
from bookkeeping.schemas.validation import validate_or_raise


@pytest.mark.unit
def test_create_log_payload_accepts_minimal_body() -> None:
    payload = validate_or_raise(CreateLogPayload, {"title": " Shift ", "text": "All good"}, scope="body")

    assert payload.title == "Shift"
    assert payload.parent_log_id is None
    assert payload.run_numbers == []
    assert payload.tags == []
    assert payload.attachments == []


@pytest.mark.unit
def test_create_log_payload_dedupes_run_numbers_and_tags() -> None:
    payload = validate_or_raise(
        CreateLogPayload,
        {"title": "Shift", "text": "All good", "runNumbers": [3, 1, 3], "tags": [2, 2], "parentLogId": 5},
        scope="body",
    )

    assert payload.run_numbers == [3, 1]
    assert payload.tags == [2]
    assert payload.parent_log_id == 5


@pytest.mark.unit
def test_create_log_payload_requires_title() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_or_raise(CreateLogPayload, {"text": "All good"}, scope="body")

    assert str(excinfo.value) == '"body.title" is required'
    assert excinfo.value.pointer == "/data/attributes/body/title"


@pytest.mark.unit
def test_create_log_payload_rejects_short_title() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_or_raise(CreateLogPayload, {"title": "ab", "text": "All good"}, scope="body")

    assert str(excinfo.value) == '"body.title" length must be at least 3 characters long'


@pytest.mark.unit
def test_create_log_payload_rejects_non_positive_parent() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_or_raise(CreateLogPayload, {"title": "Shift", "text": "All good", "parentLogId": 0}, scope="body")

    assert excinfo.value.field == "body.parentLogId"


@pytest.mark.unit
def test_create_log_payload_rejects_non_positive_run_numbers() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_or_raise(CreateLogPayload, {"title": "Shift", "text": "All good", "runNumbers": [1, -2]}, scope="body")

    assert str(excinfo.value) == '"body.runNumbers" must only contain positive integers'


@pytest.mark.unit
def test_create_tag_payload_strips_and_rejects_blank_text() -> None:
    assert validate_or_raise(CreateTagPayload, {"text": " FLP "}, scope="body").text == "FLP"

    with pytest.raises(ValidationError) as excinfo:
        validate_or_raise(CreateTagPayload, {"text": "   "}, scope="body")

    assert str(excinfo.value) == '"body.text" is not allowed to be empty'


@pytest.mark.unit
def test_create_subsystem_payload_rejects_overlong_text() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_or_raise(CreateSubsystemPayload, {"text": "x" * 256}, scope="body")

    assert excinfo.value.field == "body.text"


@pytest.mark.unit
def test_create_attachments_payload_requires_at_least_one_item() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_or_raise(CreateAttachmentsPayload, {"attachments": []}, scope="body")

    assert excinfo.value.field == "body.attachments"


@pytest.mark.unit
def test_create_attachments_payload_reports_nested_field_path() -> None:
    item = {
        "fileName": "a.png",
        "size": -1,
        "mimeType": "image/png",
        "originalName": "a.png",
        "path": "/tmp/a.png",
        "encoding": "7bit",
        "logId": 1,
    }

    with pytest.raises(ValidationError) as excinfo:
        validate_or_raise(CreateAttachmentsPayload, {"attachments": [item]}, scope="body")

    assert excinfo.value.field == "body.attachments.0.size"
    assert excinfo.value.pointer == "/data/attributes/body/attachments/0/size"
