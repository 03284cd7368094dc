"""Tests for registration, token issuing and the current-user endpoint."""

from __future__ import annotations

from fastapi.testclient import TestClient


def _register(client: TestClient, **overrides):
    payload = {"username": "carol", "email": "carol@example.com", "password": "secret123"}
    payload.update(overrides)
    return client.post("/api/auth/register", json=payload)


def test_register_login_and_me(client: TestClient) -> None:
    response = _register(client)
    assert response.status_code == 201
    assert response.json()["role"] == "user"
    assert "password" not in response.json()

    for login in ("carol@example.com", "carol"):
        token_response = client.post(
            "/api/auth/token", data={"username": login, "password": "secret123"}
        )
        assert token_response.status_code == 200
        body = token_response.json()
        assert body["token_type"] == "bearer"

    me = client.get(
        "/api/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"}
    )
    assert me.status_code == 200
    assert me.json()["username"] == "carol"


def test_duplicate_and_invalid_registrations(client: TestClient) -> None:
    assert _register(client).status_code == 201
    assert _register(client, username="other").status_code == 400
    assert _register(client, username="bad name!", email="x@example.com").status_code in (
        400,
        422,
    )
    assert _register(client, username="dave", email="d@example.com", password="123").status_code == 422


def test_wrong_password_and_bad_token(client: TestClient) -> None:
    _register(client)

    response = client.post(
        "/api/auth/token", data={"username": "carol", "password": "wrong-pass"}
    )
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"

    me = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert me.status_code == 401


def test_health(client: TestClient) -> None:
    assert client.get("/api/health").json() == {"status": "ok"}
