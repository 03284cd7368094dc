"""Use case for creating tasks."""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from typing import Sequence

from sqlalchemy.orm import Session

from synergysphere.application.use_cases.notifications import notify_task_event
from synergysphere.domain.entities import (
    ACTIVITY_CREATED,
    NOTIFICATION_TYPE_TASK_ASSIGNED,
    TASK_STATUS_TODO,
    Task,
    User,
)
from synergysphere.infrastructure.realtime import RealtimeBroadcaster
from synergysphere.infrastructure.repositories import TaskRepository
from synergysphere.utils import now_in_app_timezone

from .validators import (
    ensure_user_exists,
    validate_description,
    validate_priority,
    validate_status,
    validate_title,
)


def create_task(
    session: Session,
    broadcaster: RealtimeBroadcaster | None,
    *,
    actor: User,
    title: str,
    description: str | None = None,
    status: str = TASK_STATUS_TODO,
    priority: str = "medium",
    assignee_id: int | None = None,
    due_date: datetime | None = None,
    tags: Sequence[str] | None = None,
    estimated_hours: float | None = None,
) -> Task:
    """Create a task and tell the assignee, unless they created it themselves."""

    ensure_user_exists(session, assignee_id)
    task = Task(
        id=None,
        title=validate_title(title),
        description=validate_description(description),
        priority=validate_priority(priority),
        creator_id=actor.id,
        assignee_id=assignee_id,
        due_date=due_date,
        tags=[tag for tag in (tags or []) if tag],
        estimated_hours=estimated_hours,
    )
    now = now_in_app_timezone()
    task.apply_status(validate_status(status), now=now)
    task.record_activity(ACTIVITY_CREATED, actor.id, "Task created", now=now)

    created = TaskRepository(session).create(task)
    if broadcaster is not None:
        broadcaster.emit("task-created", asdict(created))

    if created.assignee_id and created.assignee_id != actor.id:
        notify_task_event(
            session,
            broadcaster,
            NOTIFICATION_TYPE_TASK_ASSIGNED,
            created,
            created.assignee_id,
            sender_id=actor.id,
        )
    return created
