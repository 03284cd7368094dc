"""Use case for updating tasks and announcing status moves."""

from __future__ import annotations

from dataclasses import asdict, replace
from datetime import datetime
from typing import Any, Mapping

from sqlalchemy.orm import Session

from synergysphere.application.use_cases.notifications import (
    notify_task_event,
    notify_task_moved,
)
from synergysphere.domain.entities import (
    ACTIVITY_ASSIGNED,
    ACTIVITY_STATUS_CHANGED,
    ACTIVITY_UPDATED,
    NOTIFICATION_TYPE_TASK_ASSIGNED,
    NOTIFICATION_TYPE_TASK_COMPLETED,
    TASK_STATUS_DONE,
    Task,
    User,
)
from synergysphere.infrastructure.realtime import RealtimeBroadcaster
from synergysphere.infrastructure.repositories import TaskRepository
from synergysphere.utils import ensure_app_timezone, now_in_app_timezone

from .validators import (
    ensure_can_edit,
    ensure_user_exists,
    get_task_or_raise,
    validate_description,
    validate_priority,
    validate_status,
    validate_title,
)

_EDITABLE_FIELDS = {
    "title",
    "description",
    "status",
    "priority",
    "assignee_id",
    "due_date",
    "tags",
    "estimated_hours",
    "actual_hours",
}


def _record_changes(
    task: Task, current: Task, actor: User, fields: list[str], *, now: datetime
) -> None:
    if task.status != current.status:
        task.record_activity(
            ACTIVITY_STATUS_CHANGED,
            actor.id,
            f"Status changed from {current.status} to {task.status}",
            now=now,
        )
    if task.assignee_id != current.assignee_id:
        details = "Assignee updated" if task.assignee_id else "Assignee removed"
        task.record_activity(ACTIVITY_ASSIGNED, actor.id, details, now=now)
    changed = [
        name.replace("_", " ")
        for name in fields
        if name != "assignee_id" and getattr(task, name) != getattr(current, name)
    ]
    if changed:
        details = ", ".join(f"{name} updated" for name in changed)
        task.record_activity(ACTIVITY_UPDATED, actor.id, details, now=now)


def update_task(
    session: Session,
    broadcaster: RealtimeBroadcaster | None,
    *,
    task_id: int,
    actor: User,
    changes: Mapping[str, Any],
) -> Task:
    """Apply ``changes`` to a task.

    Only the keys present in ``changes`` are modified, so ``None`` clears a
    field. Moving into ``done`` notifies the creator; any other move
    notifies the creator and assignee. The actor is never notified.
    Status moves, reassignments and other edits each get an activity entry.
    """

    current = get_task_or_raise(session, task_id)
    ensure_can_edit(current, actor)

    unknown = set(changes) - _EDITABLE_FIELDS
    if unknown:
        raise ValueError(f"Unknown task fields: {', '.join(sorted(unknown))}")

    values = dict(changes)
    if "title" in values:
        values["title"] = validate_title(values["title"])
    if "description" in values:
        values["description"] = validate_description(values["description"])
    if "priority" in values:
        values["priority"] = validate_priority(values["priority"])
    if "assignee_id" in values:
        ensure_user_exists(session, values["assignee_id"])
    if "due_date" in values:
        values["due_date"] = ensure_app_timezone(values["due_date"])
    if "tags" in values:
        values["tags"] = [tag for tag in (values["tags"] or []) if tag]
    new_status = values.pop("status", None)

    task = replace(current, **values)
    from_status = current.status
    now = now_in_app_timezone()
    if new_status is not None:
        task.apply_status(validate_status(new_status), now=now)
    _record_changes(task, current, actor, sorted(values), now=now)

    updated = TaskRepository(session).update(task)
    if broadcaster is not None:
        broadcaster.emit("task-updated", asdict(updated))

    if updated.assignee_id and updated.assignee_id != current.assignee_id:
        if updated.assignee_id != actor.id:
            notify_task_event(
                session,
                broadcaster,
                NOTIFICATION_TYPE_TASK_ASSIGNED,
                updated,
                updated.assignee_id,
                sender_id=actor.id,
            )

    if updated.status != from_status:
        if broadcaster is not None:
            broadcaster.emit(
                "task-moved",
                {
                    "taskId": updated.id,
                    "fromStatus": from_status,
                    "toStatus": updated.status,
                    "movedBy": actor.id,
                },
            )
        if updated.status == TASK_STATUS_DONE:
            if updated.creator_id != actor.id:
                notify_task_event(
                    session,
                    broadcaster,
                    NOTIFICATION_TYPE_TASK_COMPLETED,
                    updated,
                    updated.creator_id,
                    sender_id=actor.id,
                )
        else:
            notify_task_moved(
                session,
                broadcaster,
                updated,
                from_status=from_status,
                to_status=updated.status,
                actor=actor,
            )

    return updated
