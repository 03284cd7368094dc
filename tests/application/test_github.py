"""Tests for GitHub issue import and webhook handling."""

from __future__ import annotations

import pytest

from synergysphere.application.use_cases.integrations import (
    WebhookSignatureError,
    handle_issue_event,
    import_issues,
    sign_payload,
    verify_signature,
)
from synergysphere.infrastructure.repositories import NotificationRepository, TaskRepository

REPOSITORY = {"name": "board", "owner": {"login": "acme"}}


def _issue(**overrides):
    issue = {
        "id": 101,
        "number": 7,
        "title": "Crash on login",
        "body": "Steps to reproduce",
        "state": "open",
        "html_url": "https://github.com/acme/board/issues/7",
        "labels": [{"name": "priority-high"}],
    }
    issue.update(overrides)
    return issue


def test_signature_round_trip():
    body = b'{"action": "closed"}'
    signature = sign_payload("secret", body)

    assert signature.startswith("sha256=")
    verify_signature("secret", body, signature)
    with pytest.raises(WebhookSignatureError):
        verify_signature("secret", body + b" ", signature)
    with pytest.raises(WebhookSignatureError):
        verify_signature("secret", body, None)


def test_import_creates_tasks_once(session, broadcaster, alice):
    imported, skipped = import_issues(
        session, broadcaster, actor=alice, repository="acme/board", issues=[_issue()]
    )
    assert len(imported) == 1
    assert imported[0].priority == "high"
    assert imported[0].github_issue_number == 7
    assert skipped == []

    again, skipped = import_issues(
        session, broadcaster, actor=alice, repository="acme/board", issues=[_issue()]
    )
    assert again == []
    assert len(skipped) == 1
    assert broadcaster.names().count("github-sync") == 2


def test_import_requires_owner_and_name(session, broadcaster, alice):
    with pytest.raises(ValueError):
        import_issues(session, broadcaster, actor=alice, repository="board", issues=[])


def test_closed_and_reopened_issues_move_linked_tasks(session, broadcaster, alice):
    (task,), _ = import_issues(
        session, broadcaster, actor=alice, repository="acme/board", issues=[_issue()]
    )

    result = handle_issue_event(
        session,
        broadcaster,
        {"action": "closed", "issue": _issue(state="closed"), "repository": REPOSITORY},
    )
    assert result["affectedTasks"] == 1
    closed = TaskRepository(session).get(task.id)
    assert closed.status == "done"
    assert closed.completed_at is not None

    handle_issue_event(
        session, broadcaster, {"action": "reopened", "issue": _issue(), "repository": REPOSITORY}
    )
    reopened = TaskRepository(session).get(task.id)
    assert reopened.status == "todo"
    assert reopened.completed_at is None

    items, _ = NotificationRepository(session).list_for_user(alice.id, limit=None)
    titles = [item.title for item in items]
    assert "GitHub Issue Closed" in titles
    assert "GitHub Issue Synced" in titles


def test_edited_issue_copies_title_and_body(session, broadcaster, alice):
    (task,), _ = import_issues(
        session, broadcaster, actor=alice, repository="acme/board", issues=[_issue()]
    )

    handle_issue_event(
        session,
        broadcaster,
        {
            "action": "edited",
            "issue": _issue(title="Crash on logout", body="Updated"),
            "repository": REPOSITORY,
        },
    )

    edited = TaskRepository(session).get(task.id)
    assert (edited.title, edited.description) == ("Crash on logout", "Updated")


def test_unlinked_issue_is_a_no_op(session, broadcaster):
    result = handle_issue_event(
        session, broadcaster, {"action": "closed", "issue": _issue(id=555), "repository": REPOSITORY}
    )

    assert result["affectedTasks"] == 0
    with pytest.raises(ValueError):
        handle_issue_event(session, broadcaster, {"action": "closed"})


def test_webhook_changes_are_logged_as_activity(session, broadcaster, alice):
    (task,), _ = import_issues(
        session, broadcaster, actor=alice, repository="acme/board", issues=[_issue()]
    )

    for action in ("closed", "reopened", "edited"):
        handle_issue_event(
            session, broadcaster, {"action": action, "issue": _issue(), "repository": REPOSITORY}
        )

    activity = TaskRepository(session).get(task.id).activity
    assert [(entry.action, entry.details) for entry in activity] == [
        ("created", "Imported from GitHub issue"),
        ("status-changed", "Closed via GitHub"),
        ("status-changed", "Reopened via GitHub"),
        ("updated", "Updated via GitHub"),
    ]
    assert {entry.user_id for entry in activity} == {alice.id}


@pytest.mark.parametrize(
    "payload",
    [
        ["not", "an", "object"],
        "closed",
        {"action": "closed", "issue": ["id", 101], "repository": REPOSITORY},
        {"action": "closed", "issue": _issue(), "repository": "acme/board"},
    ],
)
def test_non_object_payloads_are_rejected(session, broadcaster, payload):
    with pytest.raises(ValueError):
        handle_issue_event(session, broadcaster, payload)
