"""End-to-end tests for the task board endpoints."""

from __future__ import annotations

from fastapi.testclient import TestClient


def test_assignment_is_persisted_when_assignee_is_offline(
    client: TestClient, alice, bob, headers_for
) -> None:
    response = client.post(
        "/api/tasks/",
        json={"title": "Prepare demo", "assignee_id": bob.id, "priority": "high"},
        headers=headers_for(alice),
    )
    assert response.status_code == 201
    task_id = response.json()["id"]

    listing = client.get("/api/notifications/", headers=headers_for(bob))
    assert listing.status_code == 200
    body = listing.json()
    assert body["unread_count"] == 1
    notification = body["notifications"][0]
    assert notification["type"] == "task-assigned"
    assert notification["recipient_id"] == bob.id
    assert notification["sender_id"] == alice.id
    assert notification["related_task_id"] == task_id


def test_status_round_trip_controls_completed_at(
    client: TestClient, alice, bob, headers_for
) -> None:
    task = client.post(
        "/api/tasks/", json={"title": "Close sprint"}, headers=headers_for(alice)
    ).json()
    client.put(
        f"/api/tasks/{task['id']}",
        json={"assignee_id": bob.id},
        headers=headers_for(alice),
    )

    done = client.put(
        f"/api/tasks/{task['id']}", json={"status": "done"}, headers=headers_for(bob)
    )
    assert done.status_code == 200
    assert done.json()["completed_at"] is not None

    types = [
        item["type"]
        for item in client.get("/api/notifications/", headers=headers_for(alice)).json()[
            "notifications"
        ]
    ]
    assert types == ["task-completed"]

    reverted = client.put(
        f"/api/tasks/{task['id']}", json={"status": "todo"}, headers=headers_for(bob)
    )
    assert reverted.json()["completed_at"] is None


def test_listing_filters_and_paginates(client: TestClient, alice, headers_for) -> None:
    for title, priority in (("A", "low"), ("B", "high"), ("C", "high")):
        client.post(
            "/api/tasks/",
            json={"title": title, "priority": priority},
            headers=headers_for(alice),
        )

    response = client.get(
        "/api/tasks/",
        params={"priority": "high", "sortBy": "title", "sortOrder": "asc", "limit": 1},
        headers=headers_for(alice),
    )
    body = response.json()
    assert body["pagination"] == {"page": 1, "limit": 1, "total": 2, "pages": 2}
    assert [task["title"] for task in body["tasks"]] == ["B"]


def test_permissions_and_errors(client: TestClient, alice, bob, headers_for) -> None:
    task = client.post(
        "/api/tasks/", json={"title": "Locked"}, headers=headers_for(alice)
    ).json()

    assert client.get("/api/tasks/").status_code == 401
    assert (
        client.put(
            f"/api/tasks/{task['id']}", json={"title": "Mine"}, headers=headers_for(bob)
        ).status_code
        == 403
    )
    assert client.delete(f"/api/tasks/{task['id']}", headers=headers_for(bob)).status_code == 403
    assert client.get("/api/tasks/9999", headers=headers_for(alice)).status_code == 404
    assert (
        client.post(
            "/api/tasks/", json={"title": "x", "assignee_id": 9999}, headers=headers_for(alice)
        ).status_code
        == 400
    )
    assert client.delete(f"/api/tasks/{task['id']}", headers=headers_for(alice)).status_code == 204


def test_feedback_endpoint(client: TestClient, alice, bob, headers_for) -> None:
    task = client.post(
        "/api/tasks/",
        json={"title": "Review PR", "assignee_id": bob.id},
        headers=headers_for(alice),
    ).json()

    response = client.post(
        f"/api/tasks/{task['id']}/feedback",
        json={"content": "Blocked on CI", "type": "blocker"},
        headers=headers_for(bob),
    )

    assert response.status_code == 201
    assert response.json()["feedback"][0]["kind"] == "blocker"


def test_task_read_exposes_activity_log(client: TestClient, alice, headers_for) -> None:
    headers = headers_for(alice)
    task = client.post("/api/tasks/", json={"title": "Tracked"}, headers=headers).json()

    client.put(f"/api/tasks/{task['id']}", json={"status": "done"}, headers=headers)

    activity = client.get(f"/api/tasks/{task['id']}", headers=headers).json()["activity"]
    assert [entry["action"] for entry in activity] == ["created", "status-changed"]
    assert activity[1]["details"] == "Status changed from todo to done"
    assert activity[1]["user_id"] == alice.id
