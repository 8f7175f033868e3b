import pytest
from fastapi.testclient import TestClient

from auth import context as auth_context
from core import context


@pytest.fixture(autouse=True)
def clean_contexts():
    """Each test starts and ends with empty request/auth contexts."""
    context.clear()
    auth_context.clear()
    yield
    context.clear()
    auth_context.clear()


@pytest.fixture
def app(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("JWT_SECRET", "test-secret")

    from main import create_app

    return create_app()


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)
