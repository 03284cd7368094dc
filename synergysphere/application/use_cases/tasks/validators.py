"""Validation helpers shared by the task use cases."""

from __future__ import annotations

from sqlalchemy.orm import Session

from synergysphere.domain.entities import (
    FEEDBACK_KINDS,
    TASK_PRIORITIES,
    TASK_STATUSES,
    Task,
    User,
)
from synergysphere.infrastructure.repositories import TaskRepository, UserRepository

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 2000
FEEDBACK_MAX_LENGTH = 1000


def validate_title(title: str | None) -> str:
    cleaned = (title or "").strip()
    if not cleaned:
        raise ValueError("Title is required")
    if len(cleaned) > TITLE_MAX_LENGTH:
        raise ValueError(f"Title must be at most {TITLE_MAX_LENGTH} characters")
    return cleaned


def validate_description(description: str | None) -> str | None:
    if description is not None and len(description) > DESCRIPTION_MAX_LENGTH:
        raise ValueError(
            f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters"
        )
    return description


def validate_status(status: str) -> str:
    if status not in TASK_STATUSES:
        raise ValueError(f"Invalid status '{status}'")
    return status


def validate_priority(priority: str) -> str:
    if priority not in TASK_PRIORITIES:
        raise ValueError(f"Invalid priority '{priority}'")
    return priority


def validate_feedback(content: str | None, kind: str) -> str:
    cleaned = (content or "").strip()
    if not cleaned:
        raise ValueError("Feedback content is required")
    if len(cleaned) > FEEDBACK_MAX_LENGTH:
        raise ValueError(f"Feedback must be at most {FEEDBACK_MAX_LENGTH} characters")
    if kind not in FEEDBACK_KINDS:
        raise ValueError(f"Invalid feedback type '{kind}'")
    return cleaned


def ensure_user_exists(session: Session, user_id: int | None) -> None:
    if user_id is None:
        return
    user = UserRepository(session).get(user_id)
    if user is None or not user.is_active:
        raise ValueError("Assignee not found")


def get_task_or_raise(session: Session, task_id: int) -> Task:
    task = TaskRepository(session).get(task_id)
    if task is None:
        raise LookupError("Task not found")
    return task


def ensure_can_edit(task: Task, actor: User) -> None:
    if actor.is_admin() or actor.id in (task.creator_id, task.assignee_id):
        return
    raise PermissionError("Not authorized to update this task")
