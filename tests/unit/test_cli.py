import pytest

from bookkeeping import db
from bookkeeping.cli import seed_demo_data
from bookkeeping.models import Log, Tag, User


@pytest.mark.unit
def test_seed_demo_data_builds_consistent_threads(app) -> None:
    counts = seed_demo_data()

    assert counts == {"users": 2, "tags": 6, "subsystems": 5, "runs": 5, "logs": 3}
    for log in db.session.query(Log).all():
        if log.parent_log_id is None:
            assert log.root_log_id == log.id
        else:
            assert log.root_log_id == db.session.get(Log, log.parent_log_id).root_log_id


@pytest.mark.unit
def test_seed_demo_data_is_idempotent(app) -> None:
    seed_demo_data()

    assert seed_demo_data() == {}
    assert db.session.query(User).count() == 2


@pytest.mark.unit
def test_seed_command_reports_counts(app) -> None:
    runner = app.test_cli_runner()

    first = runner.invoke(args=["seed"])
    second = runner.invoke(args=["seed"])

    assert first.exit_code == 0
    assert "tags=6" in first.output
    assert "already seeded" in second.output
    assert db.session.query(Tag).count() == 6


@pytest.mark.unit
def test_init_db_command(app) -> None:
    result = app.test_cli_runner().invoke(args=["init-db"])

    assert result.exit_code == 0
    assert "Database tables created." in result.output
