"""
Shared fixtures: a fresh SQLite file per test and a TestClient bound to it.
"""

import os

# Must be set before core.config builds its default Settings
os.environ.setdefault("LOG_TO_FILE", "false")

import pytest
from fastapi.testclient import TestClient

from core.config import Settings
from core.models import AnalysisRecord
from main import create_app


def make_settings(tmp_path, **overrides):
    values = {
        "APP_ENV": "development",
        "DATABASE_URL": f"sqlite:///{tmp_path / 'test.db'}",
        "API_KEY": None,
        "RATE_LIMIT_ENABLED": False,
        "LOG_TO_FILE": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings(tmp_path):
    return make_settings(tmp_path)


@pytest.fixture
def client(settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_client(tmp_path):
    """Factory for clients with custom settings (API key, rate limit...)."""
    clients = []

    def _make(raise_server_exceptions=True, **overrides):
        app = create_app(make_settings(tmp_path, **overrides))
        test_client = TestClient(app, raise_server_exceptions=raise_server_exceptions)
        test_client.__enter__()
        clients.append(test_client)
        return test_client

    yield _make

    for test_client in clients:
        test_client.__exit__(None, None, None)


@pytest.fixture
def db_session(client):
    session = client.app.state.ctx.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def record_count():
    """Callable returning how many analyses a client's database holds."""

    def _count(test_client) -> int:
        session = test_client.app.state.ctx.session_factory()
        try:
            return session.query(AnalysisRecord).count()
        finally:
            session.close()

    return _count
