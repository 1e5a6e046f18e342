# tests/integration/conftest.py
"""集成测试专用 fixtures.

需要真实数据库(非 SQLite), 每个测试在独立事务中执行并回滚.
"""

import os

import pytest

# 集成测试需要真实数据库,检查环境变量
if "sqlite" in os.environ.get("DATABASE_URL", "sqlite"):
    pytest.skip(
        "集成测试需要真实数据库,请设置 DATABASE_URL 环境变量",
        allow_module_level=True,
    )

from bookkeeping import create_app, db
from bookkeeping.settings import Settings


@pytest.fixture(scope="session")
def app():
    """创建测试应用实例(整个测试会话复用)."""
    app = create_app(settings=Settings.load())
    app.config["TESTING"] = True
    with app.app_context():
        db.create_all()
    return app


@pytest.fixture
def db_session(app):
    """数据库会话, 测试后自动回滚."""
    with app.app_context():
        connection = db.engine.connect()
        transaction = connection.begin()
        db.session.configure(bind=connection)

        yield db.session

        db.session.remove()
        transaction.rollback()
        connection.close()


@pytest.fixture
def client(app, db_session):
    """测试客户端,每个测试函数独立."""
    return app.test_client()
