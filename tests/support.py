"""Shared helpers: an app bound to an in-memory SQLite database."""

from fastapi import FastAPI
from fastapi.testclient import TestClient

from bookstore.core.config import Settings
from bookstore.main import create_app
from bookstore.models import Base

TEST_SECRET = "test-secret-key-for-unit-tests-only"


def make_settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "JWT_SECRET": TEST_SECRET,
        "DATABASE_URL": "sqlite://",
        "BCRYPT_ROUNDS": 4,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_app(**overrides: object) -> FastAPI:
    """Build the app with fresh tables in a private in-memory database."""
    app = create_app(make_settings(**overrides))
    Base.metadata.create_all(app.state.engine)
    return app


def make_client(**overrides: object) -> TestClient:
    return TestClient(make_app(**overrides))


def register(client: TestClient, username: str, password: str, role: str | None = None) -> int:
    body = {"username": username, "password": password}
    if role is not None:
        body["role"] = role
    return client.post("/api/register", json=body).status_code


def login_token(client: TestClient, username: str, password: str) -> str:
    resp = client.post("/api/login", json={"username": username, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()["token"]


def auth(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
