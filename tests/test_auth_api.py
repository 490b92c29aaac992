from __future__ import annotations

import logging

import pytest
from fastapi.testclient import TestClient

from acme_admin.api import create_app
from acme_admin.config import Settings
from acme_admin.store import Store


@pytest.fixture()
def client():
    app = create_app(store=Store(latency=0), settings=Settings(store_latency=0))
    with TestClient(app) as test_client:
        yield test_client


def test_login_returns_matching_user(client: TestClient) -> None:
    response = client.post("/api/auth/login", json={"email": "alice@acme.com"})

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Login successful"
    assert body["user"]["id"] == "1"
    assert body["user"]["name"] == "Alice Chen"
    assert body["user"]["createdAt"] == "2024-01-15T08:00:00Z"


def test_login_with_unknown_email_is_rejected(client: TestClient, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="acme_admin.api.auth"):
        response = client.post("/api/auth/login", json={"email": "nobody@acme.com"})

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid credentials"}
    assert "nobody@acme.com" in caplog.text


def test_login_requires_email(client: TestClient) -> None:
    response = client.post("/api/auth/login", json={})

    assert response.status_code == 400
    assert response.json() == {"error": "Missing required field: email"}


def test_login_rejects_malformed_email(client: TestClient) -> None:
    response = client.post("/api/auth/login", json={"email": "alice-at-acme"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid email format"}


def test_logout_is_stateless(client: TestClient) -> None:
    response = client.post("/api/auth/logout")

    assert response.status_code == 200
    assert response.json() == {"message": "Logout successful"}
