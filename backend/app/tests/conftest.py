"""
Shared fixtures: a fresh app per test, run against both store backends.
"""
import os

# Must be set before app.core.config builds its module-level settings
os.environ["STORE_BACKEND"] = "memory"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SECRET_KEY"] = "test-secret-key"

import pytest
from fastapi.testclient import TestClient
from app.core.config import Settings
from app.main import create_app
from app.stores import MemoryStoreProvider, SQLStoreProvider


@pytest.fixture(params=["memory", "sql"])
def app(request):
    """App wired to an in-memory store or an in-memory SQLite database."""
    test_settings = Settings(STORE_BACKEND=request.param, DATABASE_URL="sqlite:///:memory:")
    application = create_app(test_settings)
    yield application
    application.state.store_provider.close()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture(params=["memory", "sql"])
def store(request):
    """A store used directly, without HTTP."""
    if request.param == "memory":
        provider = MemoryStoreProvider()
    else:
        provider = SQLStoreProvider("sqlite:///:memory:")
    with provider.session() as s:
        yield s
    provider.close()


def register_user(client, username="alice", email="alice@example.com", password="pw123456"):
    """Register through the API and return the JSON body."""
    response = client.post(
        "/api/auth/register",
        json={"username": username, "email": email, "password": password}
    )
    assert response.status_code == 201, response.text
    return response.json()


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def alice(client):
    return register_user(client)


@pytest.fixture
def bob(client):
    return register_user(client, username="bob", email="bob@example.com", password="hunter2hunter2")
