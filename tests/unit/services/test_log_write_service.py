import pytest

from bookkeeping import db
from bookkeeping.core.exceptions import NotFoundError
from bookkeeping.models import User
from bookkeeping.schemas.logs import CreateLogPayload
from bookkeeping.services.logs.log_write_service import LogWriteService


def _payload(**overrides) -> CreateLogPayload:
    data = {"title": "Shift summary", "text": "Beam stable"}
    data.update(overrides)
    return CreateLogPayload.model_validate(data)


@pytest.mark.unit
def test_create_root_log_points_root_to_itself(app) -> None:
    log = LogWriteService().create(_payload())

    assert log.id is not None
    assert log.parent_log_id is None
    assert log.root_log_id == log.id
    assert log.origin == "human"
    assert log.subtype == "run"


@pytest.mark.unit
def test_create_reply_inherits_root_from_parent(app) -> None:
    service = LogWriteService()
    root = service.create(_payload())
    reply = service.create(_payload(parentLogId=root.id))
    nested = service.create(_payload(parentLogId=reply.id))

    assert reply.parent_log_id == root.id
    assert reply.root_log_id == root.id
    assert nested.parent_log_id == reply.id
    assert nested.root_log_id == root.id


@pytest.mark.unit
def test_create_log_uses_configured_default_author_once(app) -> None:
    app.config["DEFAULT_AUTHOR_NAME"] = "Shifter"
    service = LogWriteService()

    first = service.create(_payload())
    second = service.create(_payload())

    assert first.author.name == "Shifter"
    assert first.author_id == second.author_id
    assert db.session.query(User).count() == 1


@pytest.mark.unit
def test_create_log_rejects_missing_parent(app) -> None:
    with pytest.raises(NotFoundError) as excinfo:
        LogWriteService().create(_payload(parentLogId=999))

    assert str(excinfo.value) == "Log with this id (999) could not be found"


@pytest.mark.unit
def test_create_log_links_runs_and_tags(app, make_run, make_tag) -> None:
    run_1 = make_run(1)
    run_2 = make_run(2)
    tag = make_tag("FLP")

    log = LogWriteService().create(_payload(runNumbers=[2, 1], tags=[tag.id]))

    assert {run.id for run in log.runs} == {run_1.id, run_2.id}
    assert [item.text for item in log.tags] == ["FLP"]


@pytest.mark.unit
def test_create_log_rejects_unknown_run_number(app, make_run) -> None:
    make_run(1)

    with pytest.raises(NotFoundError) as excinfo:
        LogWriteService().create(_payload(runNumbers=[1, 7]))

    assert str(excinfo.value) == "Run with this run number (7) could not be found"


@pytest.mark.unit
def test_create_log_rejects_unknown_tag(app) -> None:
    with pytest.raises(NotFoundError) as excinfo:
        LogWriteService().create(_payload(tags=[5]))

    assert str(excinfo.value) == "Tag with this id (5) could not be found"


@pytest.mark.unit
def test_create_log_stores_attachment_metadata(app) -> None:
    attachment = {
        "fileName": "1562934400_shift.png",
        "size": 2048,
        "mimeType": "image/png",
        "originalName": "shift.png",
        "path": "/var/storage/1562934400_shift.png",
        "encoding": "7bit",
    }

    log = LogWriteService().create(_payload(attachments=[attachment]))

    assert len(log.attachments) == 1
    assert log.attachments[0].log_id == log.id
    assert log.to_dict()["attachments"][0]["originalName"] == "shift.png"
