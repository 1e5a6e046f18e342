import pytest

from bookkeeping import db
from bookkeeping.core.exceptions import ConflictError, NotFoundError
from bookkeeping.schemas.common_query import PaginatedListQuery, RunsListQuery
from bookkeeping.schemas.labels import CreateSubsystemPayload, CreateTagPayload
from bookkeeping.services.runs.run_read_service import RunReadService
from bookkeeping.services.subsystems.subsystem_read_service import SubsystemReadService
from bookkeeping.services.subsystems.subsystem_write_service import SubsystemWriteService
from bookkeeping.services.tags.tag_read_service import TagReadService
from bookkeeping.services.tags.tag_write_service import TagWriteService


@pytest.mark.unit
def test_create_tag_rejects_duplicate_text(app) -> None:
    service = TagWriteService()
    service.create(CreateTagPayload(text="FLP"))

    with pytest.raises(ConflictError):
        service.create(CreateTagPayload(text="FLP"))


@pytest.mark.unit
def test_delete_tag_detaches_logs(app, log_factory, make_tag) -> None:
    tag = make_tag("OTHER")
    log = log_factory.create("Tagged log", tags=[tag])

    deleted = TagWriteService().delete(tag.id)
    db.session.expire(log)

    assert deleted.text == "OTHER"
    assert log.tags == []
    with pytest.raises(NotFoundError):
        TagReadService().get_tag(tag.id)


@pytest.mark.unit
def test_list_logs_by_tag(app, log_factory, make_tag) -> None:
    tag = make_tag("RUN")
    tagged = log_factory.create("Tagged log", tags=[tag])
    log_factory.create("Untagged log")

    result = TagReadService().list_logs(tag.id)

    assert [log.id for log in result.logs] == [tagged.id]
    assert result.replies == {tagged.id: 0}


@pytest.mark.unit
def test_list_tags_paginates(app, make_tag) -> None:
    for text in ("A", "B", "C"):
        make_tag(text)

    page = TagReadService().list_tags(PaginatedListQuery.model_validate({"page": {"limit": "2", "offset": "2"}}))

    assert [tag.text for tag in page.tags] == ["C"]
    assert page.meta.to_dict() == {"pageCount": 2, "totalCount": 3}


@pytest.mark.unit
def test_subsystem_create_and_delete(app) -> None:
    service = SubsystemWriteService()
    subsystem = service.create(CreateSubsystemPayload(text="TPC"))

    with pytest.raises(ConflictError):
        service.create(CreateSubsystemPayload(text="TPC"))

    assert SubsystemReadService().get_subsystem(subsystem.id).name == "TPC"
    service.delete(subsystem.id)
    with pytest.raises(NotFoundError):
        SubsystemReadService().get_subsystem(subsystem.id)


@pytest.mark.unit
def test_list_runs_sorts_by_id(app, make_run) -> None:
    for run_number in (1, 2, 3):
        make_run(run_number)

    page = RunReadService().list_runs(RunsListQuery.model_validate({"sort": {"id": "desc"}}))

    assert [run.run_number for run in page.runs] == [3, 2, 1]
    assert page.meta.to_dict() == {"pageCount": 1, "totalCount": 3}
