"""Domain entities describing tasks and their feedback entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Final

TASK_STATUS_TODO: Final[str] = "todo"
TASK_STATUS_IN_PROGRESS: Final[str] = "in-progress"
TASK_STATUS_DONE: Final[str] = "done"
TASK_STATUSES: Final[tuple[str, ...]] = (
    TASK_STATUS_TODO,
    TASK_STATUS_IN_PROGRESS,
    TASK_STATUS_DONE,
)

TASK_PRIORITIES: Final[tuple[str, ...]] = ("low", "medium", "high")

FEEDBACK_KINDS: Final[tuple[str, ...]] = ("comment", "progress", "blocker")

ACTIVITY_CREATED: Final[str] = "created"
ACTIVITY_UPDATED: Final[str] = "updated"
ACTIVITY_STATUS_CHANGED: Final[str] = "status-changed"
ACTIVITY_ASSIGNED: Final[str] = "assigned"
ACTIVITY_COMMENTED: Final[str] = "commented"
ACTIVITY_ACTIONS: Final[tuple[str, ...]] = (
    ACTIVITY_CREATED,
    ACTIVITY_UPDATED,
    ACTIVITY_STATUS_CHANGED,
    ACTIVITY_ASSIGNED,
    ACTIVITY_COMMENTED,
)


@dataclass
class TaskActivity:
    """Entry of a task's activity log."""

    id: int | None
    task_id: int | None
    user_id: int
    action: str
    details: str | None = None
    created_at: datetime | None = None


@dataclass
class TaskFeedback:
    """Comment, progress note or blocker left on a task."""

    id: int | None
    task_id: int | None
    user_id: int
    content: str
    kind: str = "comment"
    created_at: datetime | None = None


@dataclass
class Task:
    """Unit of work tracked on the kanban board."""

    id: int | None
    title: str
    creator_id: int
    description: str | None = None
    status: str = TASK_STATUS_TODO
    priority: str = "medium"
    assignee_id: int | None = None
    due_date: datetime | None = None
    completed_at: datetime | None = None
    tags: list[str] = field(default_factory=list)
    estimated_hours: float | None = None
    actual_hours: float | None = None
    github_issue_id: int | None = None
    github_issue_number: int | None = None
    github_repository: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    feedback: list[TaskFeedback] = field(default_factory=list)
    activity: list[TaskActivity] = field(default_factory=list)

    def apply_status(self, status: str, *, now: datetime) -> None:
        """Move the task to ``status`` keeping ``completed_at`` consistent."""

        if status == TASK_STATUS_DONE:
            if self.completed_at is None:
                self.completed_at = now
        else:
            self.completed_at = None
        self.status = status

    def record_activity(
        self, action: str, user_id: int, details: str | None = None, *, now: datetime
    ) -> None:
        """Queue an activity entry; it is stored with the next save."""

        if action not in ACTIVITY_ACTIONS:
            raise ValueError(f"Unknown activity action: {action}")
        entry = TaskActivity(
            id=None,
            task_id=self.id,
            user_id=user_id,
            action=action,
            details=details,
            created_at=now,
        )
        self.activity = [*self.activity, entry]

    def involved_user_ids(self) -> list[int]:
        """Return the creator and the assignee without duplicates."""

        ids = [self.creator_id]
        if self.assignee_id and self.assignee_id != self.creator_id:
            ids.append(self.assignee_id)
        return ids


__all__ = [
    "ACTIVITY_ACTIONS",
    "ACTIVITY_ASSIGNED",
    "ACTIVITY_COMMENTED",
    "ACTIVITY_CREATED",
    "ACTIVITY_STATUS_CHANGED",
    "ACTIVITY_UPDATED",
    "FEEDBACK_KINDS",
    "TASK_PRIORITIES",
    "TASK_STATUSES",
    "TASK_STATUS_DONE",
    "TASK_STATUS_IN_PROGRESS",
    "TASK_STATUS_TODO",
    "Task",
    "TaskActivity",
    "TaskFeedback",
]
