"""Use case for leaving feedback on a task."""

from __future__ import annotations

from dataclasses import asdict

from sqlalchemy.orm import Session

from synergysphere.application.use_cases.notifications import notify_task_event
from synergysphere.domain.entities import (
    ACTIVITY_COMMENTED,
    NOTIFICATION_TYPE_FEEDBACK_RECEIVED,
    Task,
    TaskFeedback,
    User,
)
from synergysphere.infrastructure.realtime import RealtimeBroadcaster
from synergysphere.infrastructure.repositories import TaskRepository
from synergysphere.utils import now_in_app_timezone

from .validators import get_task_or_raise, validate_feedback


def add_feedback(
    session: Session,
    broadcaster: RealtimeBroadcaster | None,
    *,
    task_id: int,
    actor: User,
    content: str,
    kind: str = "comment",
) -> Task:
    """Attach feedback to a task and notify its creator and assignee."""

    task = get_task_or_raise(session, task_id)
    repository = TaskRepository(session)
    feedback = repository.add_feedback(
        TaskFeedback(
            id=None,
            task_id=task_id,
            user_id=actor.id,
            content=validate_feedback(content, kind),
            kind=kind,
        )
    )

    for recipient_id in task.involved_user_ids():
        if recipient_id == actor.id:
            continue
        notify_task_event(
            session,
            broadcaster,
            NOTIFICATION_TYPE_FEEDBACK_RECEIVED,
            task,
            recipient_id,
            sender_id=actor.id,
            metadata={"feedbackId": feedback.id, "feedbackType": kind},
        )

    task.record_activity(
        ACTIVITY_COMMENTED, actor.id, "Added feedback", now=now_in_app_timezone()
    )
    updated = repository.update(task)
    if broadcaster is not None:
        broadcaster.emit("task-updated", asdict(updated))
    return updated
