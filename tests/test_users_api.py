"""End-to-end tests for the ``/api/users`` resource."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from acme_admin.api import create_app
from acme_admin.config import Settings
from acme_admin.store import Store


@pytest.fixture()
def store() -> Store:
    return Store(latency=0)


@pytest.fixture()
def client(store: Store):
    app = create_app(store=store, settings=Settings(store_latency=0))
    with TestClient(app) as test_client:
        yield test_client


def test_list_users_returns_seed_records(client: TestClient) -> None:
    response = client.get("/api/users")

    assert response.status_code == 200
    users = response.json()
    assert len(users) == 8
    assert users[0] == {
        "id": "1",
        "email": "alice@acme.com",
        "name": "Alice Chen",
        "role": "admin",
        "status": "active",
        "createdAt": "2024-01-15T08:00:00Z",
        "updatedAt": "2024-01-15T08:00:00Z",
    }


def test_read_user_returns_public_subset(client: TestClient) -> None:
    response = client.get("/api/users/1")

    assert response.status_code == 200
    assert response.json() == {
        "id": "1",
        "email": "alice@acme.com",
        "name": "Alice Chen",
        "role": "admin",
    }


def test_read_unknown_user_returns_404(client: TestClient) -> None:
    response = client.get("/api/users/999")

    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


def test_read_user_profile(client: TestClient) -> None:
    response = client.get("/api/users/1/profile")

    assert response.status_code == 200
    assert response.json() == {
        "displayName": "Alice Chen",
        "email": "alice@acme.com",
        "initials": "AC",
    }


def test_profile_initials_are_uppercased(client: TestClient) -> None:
    created = client.post("/api/users", json={"email": "lower@acme.com", "name": "ada  de lovelace"})
    user_id = created.json()["id"]

    response = client.get(f"/api/users/{user_id}/profile")

    assert response.json()["initials"] == "ADL"


def test_profile_for_unknown_user_returns_404(client: TestClient) -> None:
    response = client.get("/api/users/999/profile")

    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


def test_create_user(client: TestClient) -> None:
    response = client.post(
        "/api/users",
        json={"email": "test@acme.com", "name": "Test User", "role": "designer"},
    )

    assert response.status_code == 201, response.text
    user = response.json()
    assert user["id"] == "9"
    assert user["email"] == "test@acme.com"
    assert user["role"] == "designer"
    assert user["status"] == "active"
    assert user["createdAt"] == user["updatedAt"]

    listing = client.get("/api/users").json()
    assert listing[-1]["email"] == "test@acme.com"


def test_create_user_defaults_role(client: TestClient) -> None:
    response = client.post("/api/users", json={"email": "dev@acme.com", "name": "Dev"})

    assert response.status_code == 201
    assert response.json()["role"] == "developer"


def test_create_user_with_duplicate_email_conflicts(client: TestClient) -> None:
    response = client.post("/api/users", json={"email": "alice@acme.com", "name": "Alice Again"})

    assert response.status_code == 409
    assert response.json() == {"error": "Email already exists"}


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ({}, "Missing required field: email"),
        ({"email": "bad-email"}, "Missing required field: name"),
        ({"email": "", "name": "Empty"}, "Missing required field: email"),
        ({"email": "bad-email", "name": "Bad"}, "Invalid email format"),
        ({"email": "a b@acme.com", "name": "Spaces"}, "Invalid email format"),
        ({"email": "x@acme.com", "name": 42}, "Invalid value for field: name"),
    ],
)
def test_create_user_validation(client: TestClient, payload: dict, message: str) -> None:
    response = client.post("/api/users", json=payload)

    assert response.status_code == 400
    assert response.json() == {"error": message}


def test_create_user_rejects_malformed_json(client: TestClient) -> None:
    response = client.post(
        "/api/users",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid JSON body"}


def test_create_user_rejects_non_object_body(client: TestClient) -> None:
    response = client.post("/api/users", json=["alice@acme.com"])

    assert response.status_code == 400
    assert response.json() == {"error": "Request body must be a JSON object"}


def test_update_user(client: TestClient) -> None:
    response = client.patch("/api/users/2", json={"name": "Robert Smith", "id": "77", "team": "x"})

    assert response.status_code == 200
    user = response.json()
    assert user["id"] == "2"
    assert user["name"] == "Robert Smith"
    assert user["email"] == "bob@acme.com"
    assert "team" not in user
    assert user["updatedAt"] != "2024-02-01T14:00:00Z"


def test_update_user_status(client: TestClient) -> None:
    response = client.patch("/api/users/8", json={"status": "active"})

    assert response.status_code == 200
    assert response.json()["status"] == "active"


def test_update_unknown_user_returns_404(client: TestClient) -> None:
    response = client.patch("/api/users/999", json={"name": "Ghost"})

    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}


def test_delete_user_soft_deletes(client: TestClient) -> None:
    response = client.delete("/api/users/3")

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "User deactivated"
    assert body["user"]["id"] == "3"
    assert body["user"]["status"] == "inactive"

    again = client.delete("/api/users/3")
    assert again.status_code == 200
    assert again.json()["user"]["status"] == "inactive"

    assert client.get("/api/users/3").status_code == 200


def test_delete_unknown_user_returns_404(client: TestClient) -> None:
    response = client.delete("/api/users/999")

    assert response.status_code == 404
    assert response.json() == {"error": "User not found"}
