"""
Shared fixtures: an application bound to a fresh in-memory SQLite database per test.
"""
import pytest
from fastapi.testclient import TestClient
from expense_tracker.core.config import Settings
from expense_tracker.main import create_app


@pytest.fixture
def settings():
    return Settings(
        DATABASE_URL="sqlite://",
        SECRET_KEY="test-secret-key",
        BCRYPT_ROUNDS=4,
        CORS_ORIGINS=["http://testserver"],
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    # Entering the context runs startup (tables + category seed)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register(client):
    """Register a user and return the auth response body."""
    def _register(email="alice@example.com", password="secret123", name="Alice"):
        response = client.post(
            "/api/auth/register",
            json={"email": email, "password": password, "name": name}
        )
        assert response.status_code == 201, response.text
        return response.json()
    return _register


@pytest.fixture
def auth_headers(register):
    data = register()
    return {"Authorization": f"Bearer {data['token']}"}


@pytest.fixture
def other_auth_headers(register):
    data = register(email="bob@example.com", password="hunter22", name="Bob")
    return {"Authorization": f"Bearer {data['token']}"}


@pytest.fixture
def categories(client, auth_headers):
    """Catalog keyed by category name."""
    response = client.get("/api/categories", headers=auth_headers)
    assert response.status_code == 200
    return {category["name"]: category for category in response.json()}


@pytest.fixture
def create_expense(client, auth_headers):
    def _create(headers=None, **fields):
        response = client.post("/api/expenses", json=fields, headers=headers or auth_headers)
        assert response.status_code == 201, response.text
        return response.json()["expense"]
    return _create
