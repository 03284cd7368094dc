"""Tests for the task use cases and the notifications they trigger."""

from __future__ import annotations

import pytest

from synergysphere.application.use_cases.tasks import (
    add_feedback,
    create_task,
    delete_task,
    update_task,
)
from synergysphere.infrastructure.models import TaskActivityModel
from synergysphere.infrastructure.repositories import NotificationRepository


def _notifications(session, user_id):
    items, _ = NotificationRepository(session).list_for_user(user_id)
    return list(items)


def test_assigning_a_task_notifies_the_assignee(session, broadcaster, alice, bob):
    task = create_task(
        session, broadcaster, actor=alice, title="Write docs", assignee_id=bob.id
    )

    received = _notifications(session, bob.id)
    assert len(received) == 1
    assert received[0].type == "task-assigned"
    assert received[0].sender_id == alice.id
    assert received[0].related_task_id == task.id
    assert received[0].action_url == f"/tasks/{task.id}"
    assert [n.recipient_id for n in broadcaster.notifications] == [bob.id]
    assert broadcaster.names() == ["task-created"]


def test_self_assignment_is_silent(session, broadcaster, alice):
    create_task(session, broadcaster, actor=alice, title="Mine", assignee_id=alice.id)

    assert _notifications(session, alice.id) == []


def test_unknown_assignee_is_rejected(session, broadcaster, alice):
    with pytest.raises(ValueError):
        create_task(session, broadcaster, actor=alice, title="Orphan", assignee_id=4242)


def test_completing_a_task_sets_completed_at_and_notifies_creator(
    session, broadcaster, alice, bob
):
    task = create_task(
        session, broadcaster, actor=alice, title="Ship it", assignee_id=bob.id
    )

    done = update_task(
        session, broadcaster, task_id=task.id, actor=bob, changes={"status": "done"}
    )
    assert done.completed_at is not None

    completed = [n for n in _notifications(session, alice.id) if n.type == "task-completed"]
    assert len(completed) == 1
    assert completed[0].sender_id == bob.id

    moved = [data for event, _, data in broadcaster.events if event == "task-moved"]
    assert moved == [
        {"taskId": task.id, "fromStatus": "todo", "toStatus": "done", "movedBy": bob.id}
    ]

    reopened = update_task(
        session, broadcaster, task_id=task.id, actor=bob, changes={"status": "in-progress"}
    )
    assert reopened.completed_at is None


def test_creator_completing_own_task_gets_no_notification(session, broadcaster, alice):
    task = create_task(session, broadcaster, actor=alice, title="Solo")

    update_task(session, broadcaster, task_id=task.id, actor=alice, changes={"status": "done"})

    assert _notifications(session, alice.id) == []


def test_moving_a_task_notifies_everyone_but_the_actor(session, broadcaster, alice, bob):
    task = create_task(
        session, broadcaster, actor=alice, title="Board work", assignee_id=bob.id
    )
    before = len(_notifications(session, bob.id))

    update_task(
        session, broadcaster, task_id=task.id, actor=alice, changes={"status": "in-progress"}
    )

    moved = [n for n in _notifications(session, bob.id) if n.title == "Task Moved"]
    assert len(_notifications(session, bob.id)) == before + 1
    assert moved[0].metadata == {
        "fromStatus": "todo",
        "toStatus": "in-progress",
        "movedBy": alice.id,
    }
    assert _notifications(session, alice.id) == []


def test_outsiders_cannot_edit_or_delete(session, broadcaster, alice, bob, admin):
    task = create_task(session, broadcaster, actor=alice, title="Private")

    with pytest.raises(PermissionError):
        update_task(session, broadcaster, task_id=task.id, actor=bob, changes={"title": "x"})
    with pytest.raises(PermissionError):
        delete_task(session, broadcaster, task_id=task.id, actor=bob)

    delete_task(session, broadcaster, task_id=task.id, actor=admin)
    assert ("task-deleted", None, {"id": task.id}) in broadcaster.events
    with pytest.raises(LookupError):
        delete_task(session, broadcaster, task_id=task.id, actor=admin)


def test_update_rejects_unknown_fields_and_bad_status(session, broadcaster, alice):
    task = create_task(session, broadcaster, actor=alice, title="Strict")

    with pytest.raises(ValueError):
        update_task(session, broadcaster, task_id=task.id, actor=alice, changes={"owner": 1})
    with pytest.raises(ValueError):
        update_task(
            session, broadcaster, task_id=task.id, actor=alice, changes={"status": "blocked"}
        )


def test_feedback_notifies_involved_users_except_author(session, broadcaster, alice, bob):
    task = create_task(
        session, broadcaster, actor=alice, title="Review", assignee_id=bob.id
    )

    updated = add_feedback(
        session, broadcaster, task_id=task.id, actor=bob, content="Looks good", kind="progress"
    )

    assert [entry.content for entry in updated.feedback] == ["Looks good"]
    feedback = [n for n in _notifications(session, alice.id) if n.type == "feedback-received"]
    assert len(feedback) == 1
    assert not [n for n in _notifications(session, bob.id) if n.type == "feedback-received"]


def test_activity_log_follows_task_changes(session, broadcaster, alice, bob):
    task = create_task(session, broadcaster, actor=alice, title="Audit me")
    assert [(entry.action, entry.details) for entry in task.activity] == [
        ("created", "Task created")
    ]

    update_task(
        session,
        broadcaster,
        task_id=task.id,
        actor=alice,
        changes={
            "status": "in-progress",
            "assignee_id": bob.id,
            "title": "Audited",
            "tags": ["ops"],
        },
    )
    update_task(session, broadcaster, task_id=task.id, actor=alice, changes={"title": "Audited"})
    updated = add_feedback(session, broadcaster, task_id=task.id, actor=bob, content="On it")

    assert [(entry.action, entry.user_id, entry.details) for entry in updated.activity] == [
        ("created", alice.id, "Task created"),
        ("status-changed", alice.id, "Status changed from todo to in-progress"),
        ("assigned", alice.id, "Assignee updated"),
        ("updated", alice.id, "tags updated, title updated"),
        ("commented", bob.id, "Added feedback"),
    ]
    assert all(entry.id is not None and entry.created_at for entry in updated.activity)


def test_activity_log_is_removed_with_the_task(session, broadcaster, alice):
    task = create_task(session, broadcaster, actor=alice, title="Short lived")

    delete_task(session, broadcaster, task_id=task.id, actor=alice)

    assert session.query(TaskActivityModel).count() == 0
