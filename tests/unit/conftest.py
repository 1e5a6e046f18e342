# tests/unit/conftest.py
"""单元测试专用 fixtures.

提供隔离的 Flask 应用、内存数据库与常用数据构造器.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from bookkeeping import create_app, db
from bookkeeping.models import Log, Run, Subsystem, Tag, User
from bookkeeping.settings import Settings


@pytest.fixture(autouse=True)
def _unit_test_env(monkeypatch):
    """为 unit tests 强制注入隔离环境变量.

    目标:
    - unit tests 不依赖外部数据库
    - 避免开发者本机环境变量影响测试稳定性
    """
    monkeypatch.setenv("FLASK_ENV", "testing")
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    monkeypatch.setenv("SECRET_KEY", "test-secret-key")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")


@pytest.fixture
def app():
    """创建测试应用实例(内存 SQLite, 每个测试独立建表)."""
    settings = Settings.load()
    app = create_app(settings=settings)
    app.config["TESTING"] = True
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


BASE_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)


class LogFactory:
    """按需构造日志线程, 自动维护 root_log_id."""

    def __init__(self) -> None:
        self._sequence = 0
        self.author = User(external_id=100, name="John Doe")
        db.session.add(self.author)
        db.session.flush()

    def create(
        self,
        title: str = "Log title",
        *,
        parent: Log | None = None,
        author: User | None = None,
        tags: list[Tag] | None = None,
        created_at: datetime | None = None,
        origin: str = "human",
        text: str = "Log text",
    ) -> Log:
        self._sequence += 1
        log = Log(
            title=title,
            text=text,
            author=author or self.author,
            origin=origin,
            subtype="run",
            parent_log_id=parent.id if parent else None,
            root_log_id=parent.root_log_id if parent else None,
            created_at=created_at or BASE_TIME + timedelta(minutes=self._sequence),
        )
        log.tags = list(tags or [])
        db.session.add(log)
        db.session.flush()
        if parent is None:
            log.root_log_id = log.id
            db.session.flush()
        return log


@pytest.fixture
def log_factory(app):
    return LogFactory()


@pytest.fixture
def make_tag(app):
    def _make(text: str) -> Tag:
        tag = Tag(text=text)
        db.session.add(tag)
        db.session.flush()
        return tag

    return _make


@pytest.fixture
def make_run(app):
    def _make(run_number: int) -> Run:
        run = Run(run_number=run_number, run_type="physics", run_quality="good")
        db.session.add(run)
        db.session.flush()
        return run

    return _make


@pytest.fixture
def make_subsystem(app):
    def _make(name: str) -> Subsystem:
        subsystem = Subsystem(name=name)
        db.session.add(subsystem)
        db.session.flush()
        return subsystem

    return _make
