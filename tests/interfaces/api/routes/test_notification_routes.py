"""Tests for the notification endpoints."""

from __future__ import annotations

from datetime import timedelta

from fastapi.testclient import TestClient

from synergysphere.application.use_cases.notifications import create_notification
from synergysphere.infrastructure.database import SessionLocal
from synergysphere.utils import now_in_app_timezone


def _seed(user, *, type: str = "system-alert", expires_in: timedelta | None = None):
    expires_at = now_in_app_timezone() + expires_in if expires_in is not None else None
    with SessionLocal() as session:
        return create_notification(
            session,
            None,
            recipient_id=user.id,
            type=type,
            title="Notice",
            message="Body",
            expires_at=expires_at,
        )


def test_read_unread_and_counts(client: TestClient, alice, headers_for) -> None:
    first = _seed(alice)
    _seed(alice, type="task-updated")
    headers = headers_for(alice)

    assert client.get("/api/notifications/unread-count", headers=headers).json() == {
        "unread_count": 2
    }

    read = client.patch(f"/api/notifications/{first.id}/read", headers=headers).json()
    assert read["read"] is True and read["read_at"] is not None

    unread = client.patch(f"/api/notifications/{first.id}/unread", headers=headers).json()
    assert unread["read"] is False and unread["read_at"] is None

    types = client.get("/api/notifications/types", headers=headers).json()
    assert types == ["system-alert", "task-updated"]

    filtered = client.get(
        "/api/notifications/", params={"type": "task-updated"}, headers=headers
    ).json()
    assert filtered["pagination"]["total"] == 1


def test_read_all_and_clear_read_are_scoped(
    client: TestClient, alice, bob, headers_for
) -> None:
    _seed(alice)
    _seed(alice)
    foreign = _seed(bob)

    response = client.patch("/api/notifications/read-all", headers=headers_for(alice))
    assert response.json() == {"message": "All notifications marked as read", "count": 2}

    cleared = client.delete("/api/notifications/clear-read", headers=headers_for(alice))
    assert cleared.json()["count"] == 2

    bobs = client.get(f"/api/notifications/{foreign.id}", headers=headers_for(bob)).json()
    assert bobs["read"] is False


def test_foreign_and_missing_notifications(
    client: TestClient, alice, bob, headers_for
) -> None:
    foreign = _seed(bob)

    assert client.get(f"/api/notifications/{foreign.id}", headers=headers_for(alice)).status_code == 403
    assert client.delete(f"/api/notifications/{foreign.id}", headers=headers_for(alice)).status_code == 403
    assert client.get("/api/notifications/9999", headers=headers_for(alice)).status_code == 404
    assert client.delete(f"/api/notifications/{foreign.id}", headers=headers_for(bob)).status_code == 204


def test_stats_ignore_expired(client: TestClient, alice, headers_for) -> None:
    _seed(alice)
    _seed(alice, expires_in=timedelta(minutes=-5))

    stats = client.get("/api/notifications/stats", headers=headers_for(alice)).json()

    assert stats["total"] == 1
    assert stats["unread"] == 1
    assert stats["by_type"] == {"system-alert": 1}
