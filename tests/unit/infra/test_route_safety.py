import pytest
from sqlalchemy.exc import OperationalError

from bookkeeping import db
from bookkeeping.core.exceptions import DatabaseError, NotFoundError, SystemError
from bookkeeping.infra.route_safety import safe_route_call
from bookkeeping.models import Tag


def _call(func):
    return safe_route_call(func, module="tags", action="create_tag", public_error="创建标签失败")


@pytest.mark.unit
def test_safe_route_call_commits_on_success(app) -> None:
    def _execute():
        db.session.add(Tag(text="FLP"))
        return "ok"

    assert _call(_execute) == "ok"
    db.session.rollback()
    assert db.session.query(Tag).count() == 1


@pytest.mark.unit
def test_safe_route_call_rolls_back_and_reraises_expected_errors(app) -> None:
    def _execute():
        db.session.add(Tag(text="FLP"))
        db.session.flush()
        raise NotFoundError.for_entity("Log", 1)

    with pytest.raises(NotFoundError):
        _call(_execute)
    assert db.session.query(Tag).count() == 0


@pytest.mark.unit
def test_safe_route_call_wraps_database_errors(app) -> None:
    def _execute():
        raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    with pytest.raises(DatabaseError) as excinfo:
        _call(_execute)
    assert excinfo.value.message == "创建标签失败"


@pytest.mark.unit
def test_safe_route_call_wraps_unexpected_errors(app) -> None:
    def _execute():
        raise RuntimeError("boom")

    with pytest.raises(SystemError) as excinfo:
        _call(_execute)
    assert isinstance(excinfo.value.__cause__, RuntimeError)
