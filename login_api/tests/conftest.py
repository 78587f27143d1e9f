import pytest
from fastapi.testclient import TestClient

from login_api.core.database import init_engine, create_all_tables, dispose_engine


@pytest.fixture(scope="function", autouse=True)
def database():
    """
    Fresh in-memory SQLite database per test.

    StaticPool keeps one shared connection so every session sees the same data.
    """
    init_engine("sqlite://")
    create_all_tables()
    yield
    dispose_engine()


@pytest.fixture
def client():
    from login_api.main import app

    app.dependency_overrides = {}
    yield TestClient(app)
    app.dependency_overrides = {}
