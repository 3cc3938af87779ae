"""Pytest configuration and fixtures."""
import mongomock
import pytest
from fastapi.testclient import TestClient

from cardvote.database.connection import ensure_indexes, get_database
from cardvote.main import app


@pytest.fixture
def db():
    """In-memory database with the same indexes as production."""
    client = mongomock.MongoClient()
    database = client["CARD_test"]
    ensure_indexes(database)
    yield database
    client.close()


@pytest.fixture
def client(db):
    app.dependency_overrides[get_database] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_emails(monkeypatch):
    emails = ["admin@card2025.org"]
    monkeypatch.setattr("cardvote.crud.ADMIN_EMAILS", emails)
    return emails


@pytest.fixture
def sign_in(client):
    """Upsert a user the way the client does after Google sign-in."""
    def _sign_in(uid="u1", email="u1@card2025.org", name="User One", **extra):
        payload = {"uid": uid, "email": email, "name": name, **extra}
        response = client.post("/users", json=payload)
        assert response.status_code in (200, 201), response.text
        return response.json()
    return _sign_in


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def voter_headers(sign_in):
    return auth_headers(sign_in()["access_token"])


@pytest.fixture
def admin_headers(sign_in, admin_emails):
    body = sign_in(uid="admin", email=admin_emails[0], name="Admin")
    assert body["user"]["role"] == "admin"
    return auth_headers(body["access_token"])
