"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Final

NOTIFICATION_TYPE_TASK_ASSIGNED: Final[str] = "task-assigned"
NOTIFICATION_TYPE_TASK_UPDATED: Final[str] = "task-updated"
NOTIFICATION_TYPE_TASK_COMPLETED: Final[str] = "task-completed"
NOTIFICATION_TYPE_MEETING_INVITE: Final[str] = "meeting-invite"
NOTIFICATION_TYPE_MEETING_REMINDER: Final[str] = "meeting-reminder"
NOTIFICATION_TYPE_GITHUB_ISSUE_SYNCED: Final[str] = "github-issue-synced"
NOTIFICATION_TYPE_WEEKLY_REPORT_READY: Final[str] = "weekly-report-ready"
NOTIFICATION_TYPE_FEEDBACK_RECEIVED: Final[str] = "feedback-received"
NOTIFICATION_TYPE_SYSTEM_ALERT: Final[str] = "system-alert"

NOTIFICATION_TYPES: Final[tuple[str, ...]] = (
    NOTIFICATION_TYPE_TASK_ASSIGNED,
    NOTIFICATION_TYPE_TASK_UPDATED,
    NOTIFICATION_TYPE_TASK_COMPLETED,
    NOTIFICATION_TYPE_MEETING_INVITE,
    NOTIFICATION_TYPE_MEETING_REMINDER,
    NOTIFICATION_TYPE_GITHUB_ISSUE_SYNCED,
    NOTIFICATION_TYPE_WEEKLY_REPORT_READY,
    NOTIFICATION_TYPE_FEEDBACK_RECEIVED,
    NOTIFICATION_TYPE_SYSTEM_ALERT,
)

PRIORITY_LOW: Final[str] = "low"
PRIORITY_MEDIUM: Final[str] = "medium"
PRIORITY_HIGH: Final[str] = "high"
PRIORITY_URGENT: Final[str] = "urgent"

NOTIFICATION_PRIORITIES: Final[tuple[str, ...]] = (
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
    PRIORITY_HIGH,
    PRIORITY_URGENT,
)

TITLE_MAX_LENGTH: Final[int] = 200
MESSAGE_MAX_LENGTH: Final[int] = 1000


@dataclass
class Notification:
    """Information message delivered to a specific user.

    ``read`` and ``read_at`` always move together: a read notification carries
    the moment it was read and an unread one has no timestamp.
    """

    id: int | None
    recipient_id: int
    type: str
    title: str
    message: str
    sender_id: int | None = None
    related_task_id: int | None = None
    related_meeting_id: int | None = None
    action_url: str | None = None
    action_text: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    read: bool = False
    read_at: datetime | None = None
    priority: str = PRIORITY_MEDIUM
    expires_at: datetime | None = None
    created_at: datetime | None = None


__all__ = [
    "Notification",
    "NOTIFICATION_TYPES",
    "NOTIFICATION_PRIORITIES",
    "NOTIFICATION_TYPE_TASK_ASSIGNED",
    "NOTIFICATION_TYPE_TASK_UPDATED",
    "NOTIFICATION_TYPE_TASK_COMPLETED",
    "NOTIFICATION_TYPE_MEETING_INVITE",
    "NOTIFICATION_TYPE_MEETING_REMINDER",
    "NOTIFICATION_TYPE_GITHUB_ISSUE_SYNCED",
    "NOTIFICATION_TYPE_WEEKLY_REPORT_READY",
    "NOTIFICATION_TYPE_FEEDBACK_RECEIVED",
    "NOTIFICATION_TYPE_SYSTEM_ALERT",
    "PRIORITY_LOW",
    "PRIORITY_MEDIUM",
    "PRIORITY_HIGH",
    "PRIORITY_URGENT",
    "TITLE_MAX_LENGTH",
    "MESSAGE_MAX_LENGTH",
]
