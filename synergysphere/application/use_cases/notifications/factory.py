"""Create notifications from fixed templates and push them to live clients."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Iterable, Mapping

from sqlalchemy.orm import Session

from synergysphere.config import get_settings
from synergysphere.domain.entities import (
    MESSAGE_MAX_LENGTH,
    NOTIFICATION_PRIORITIES,
    NOTIFICATION_TYPES,
    NOTIFICATION_TYPE_FEEDBACK_RECEIVED,
    NOTIFICATION_TYPE_GITHUB_ISSUE_SYNCED,
    NOTIFICATION_TYPE_MEETING_INVITE,
    NOTIFICATION_TYPE_MEETING_REMINDER,
    NOTIFICATION_TYPE_SYSTEM_ALERT,
    NOTIFICATION_TYPE_TASK_ASSIGNED,
    NOTIFICATION_TYPE_TASK_COMPLETED,
    NOTIFICATION_TYPE_TASK_UPDATED,
    NOTIFICATION_TYPE_WEEKLY_REPORT_READY,
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
    TITLE_MAX_LENGTH,
    Meeting,
    Notification,
    Task,
    User,
)
from synergysphere.infrastructure.realtime import RealtimeBroadcaster
from synergysphere.infrastructure.repositories import NotificationRepository
from synergysphere.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

MEETING_CANCELLED = "meeting-cancelled"


@dataclass(frozen=True)
class _Template:
    title: str
    message: str
    priority: str


_TASK_TEMPLATES: dict[str, _Template] = {
    NOTIFICATION_TYPE_TASK_ASSIGNED: _Template(
        "New Task Assigned", "You have been assigned to: {title}", PRIORITY_MEDIUM
    ),
    NOTIFICATION_TYPE_TASK_UPDATED: _Template(
        "Task Updated", 'Task "{title}" has been updated', PRIORITY_LOW
    ),
    NOTIFICATION_TYPE_TASK_COMPLETED: _Template(
        "Task Completed", 'Task "{title}" has been completed', PRIORITY_MEDIUM
    ),
    NOTIFICATION_TYPE_FEEDBACK_RECEIVED: _Template(
        "New Feedback", 'New feedback received on task "{title}"', PRIORITY_MEDIUM
    ),
}

_MEETING_TEMPLATES: dict[str, _Template] = {
    NOTIFICATION_TYPE_MEETING_INVITE: _Template(
        "Meeting Invitation", "You have been invited to: {title}", PRIORITY_HIGH
    ),
    NOTIFICATION_TYPE_MEETING_REMINDER: _Template(
        "Meeting Reminder", 'Meeting "{title}" starts in 15 minutes', PRIORITY_HIGH
    ),
    MEETING_CANCELLED: _Template(
        "Meeting Cancelled", 'Meeting "{title}" has been cancelled', PRIORITY_MEDIUM
    ),
}

_GITHUB_TEMPLATES: dict[str, _Template] = {
    "issue-imported": _Template(
        "GitHub Issue Imported",
        'Issue "{title}" has been imported from GitHub',
        PRIORITY_MEDIUM,
    ),
    "issue-synced": _Template(
        "GitHub Issue Synced", 'Issue "{title}" has been synced with GitHub', PRIORITY_LOW
    ),
    "issue-closed": _Template(
        "GitHub Issue Closed", 'Issue "{title}" has been closed on GitHub', PRIORITY_MEDIUM
    ),
}


def _validate(
    *, recipient_id: int | None, type: str, title: str, message: str, priority: str
) -> None:
    if not recipient_id:
        raise ValueError("Notification recipient is required")
    if type not in NOTIFICATION_TYPES:
        raise ValueError(f"Unknown notification type '{type}'")
    if priority not in NOTIFICATION_PRIORITIES:
        raise ValueError(f"Unknown notification priority '{priority}'")
    if not title or not title.strip():
        raise ValueError("Notification title is required")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValueError(f"Notification title exceeds {TITLE_MAX_LENGTH} characters")
    if not message or not message.strip():
        raise ValueError("Notification message is required")
    if len(message) > MESSAGE_MAX_LENGTH:
        raise ValueError(f"Notification message exceeds {MESSAGE_MAX_LENGTH} characters")


def create_notification(
    session: Session,
    broadcaster: RealtimeBroadcaster | None,
    *,
    recipient_id: int,
    type: str,
    title: str,
    message: str,
    sender_id: int | None = None,
    related_task_id: int | None = None,
    related_meeting_id: int | None = None,
    action_url: str | None = None,
    action_text: str | None = None,
    metadata: Mapping[str, Any] | None = None,
    priority: str = PRIORITY_MEDIUM,
    expires_at: datetime | None = None,
) -> Notification:
    """Persist a notification and push it to the recipient's room.

    The stored record is the source of truth. The live push is best effort:
    when the recipient is offline it is silently dropped and the record is
    delivered later through the list endpoints or the websocket ``init``
    snapshot.
    """

    _validate(
        recipient_id=recipient_id,
        type=type,
        title=title,
        message=message,
        priority=priority,
    )
    now = now_in_app_timezone()
    if expires_at is None:
        expires_at = now + timedelta(days=get_settings().notification_ttl_days)

    saved = NotificationRepository(session).create(
        Notification(
            id=None,
            recipient_id=recipient_id,
            sender_id=sender_id,
            type=type,
            title=title,
            message=message,
            related_task_id=related_task_id,
            related_meeting_id=related_meeting_id,
            action_url=action_url,
            action_text=action_text,
            metadata=dict(metadata or {}),
            priority=priority,
            expires_at=expires_at,
            created_at=now,
        )
    )
    logger.debug(
        "Notification %s (%s) stored for user %s", saved.id, saved.type, recipient_id
    )
    if broadcaster is not None:
        broadcaster.push_notification(saved)
    return saved


def notify_task_event(
    session: Session,
    broadcaster: RealtimeBroadcaster | None,
    kind: str,
    task: Task,
    recipient_id: int,
    *,
    sender_id: int | None = None,
    metadata: Mapping[str, Any] | None = None,
) -> Notification:
    template = _TASK_TEMPLATES.get(kind)
    if template is None:
        raise ValueError(f"Unknown task notification type '{kind}'")
    return create_notification(
        session,
        broadcaster,
        recipient_id=recipient_id,
        sender_id=sender_id,
        type=kind,
        title=template.title,
        message=template.message.format(title=task.title),
        related_task_id=task.id,
        action_url=f"/tasks/{task.id}",
        action_text="View Task",
        priority=template.priority,
        metadata=metadata,
    )


def notify_task_moved(
    session: Session,
    broadcaster: RealtimeBroadcaster | None,
    task: Task,
    *,
    from_status: str,
    to_status: str,
    actor: User,
) -> list[Notification]:
    """Tell the creator and assignee, but never the actor, that a task moved."""

    message = f'{actor.username} moved "{task.title}" from {from_status} to {to_status}'
    metadata = {"fromStatus": from_status, "toStatus": to_status, "movedBy": actor.id}
    created = []
    for recipient_id in task.involved_user_ids():
        if recipient_id == actor.id:
            continue
        created.append(
            create_notification(
                session,
                broadcaster,
                recipient_id=recipient_id,
                sender_id=actor.id,
                type=NOTIFICATION_TYPE_TASK_UPDATED,
                title="Task Moved",
                message=message,
                related_task_id=task.id,
                action_url=f"/tasks/{task.id}",
                action_text="View Task",
                priority=PRIORITY_LOW,
                metadata=metadata,
            )
        )
    return created


def notify_meeting_event(
    session: Session,
    broadcaster: RealtimeBroadcaster | None,
    kind: str,
    meeting: Meeting,
    recipient_id: int,
    *,
    sender_id: int | None = None,
    metadata: Mapping[str, Any] | None = None,
) -> Notification:
    template = _MEETING_TEMPLATES.get(kind)
    if template is None:
        raise ValueError(f"Unknown meeting notification type '{kind}'")
    # Cancellations have no dedicated type and are delivered as system alerts.
    type = NOTIFICATION_TYPE_SYSTEM_ALERT if kind == MEETING_CANCELLED else kind
    return create_notification(
        session,
        broadcaster,
        recipient_id=recipient_id,
        sender_id=sender_id,
        type=type,
        title=template.title,
        message=template.message.format(title=meeting.title),
        related_meeting_id=meeting.id,
        action_url=f"/meetings/{meeting.id}",
        action_text="View Meeting",
        priority=template.priority,
        metadata=metadata,
    )


def notify_github_event(
    session: Session,
    broadcaster: RealtimeBroadcaster | None,
    action: str,
    issue: Mapping[str, Any],
    recipient_id: int,
    *,
    metadata: Mapping[str, Any] | None = None,
) -> Notification:
    template = _GITHUB_TEMPLATES.get(action)
    if template is None:
        raise ValueError(f"Unknown GitHub action '{action}'")
    details = {
        key: issue.get(key)
        for key in ("id", "number", "title", "state", "html_url")
        if issue.get(key) is not None
    }
    details.update(metadata or {})
    return create_notification(
        session,
        broadcaster,
        recipient_id=recipient_id,
        type=NOTIFICATION_TYPE_GITHUB_ISSUE_SYNCED,
        title=template.title,
        message=template.message.format(title=issue.get("title") or "untitled"),
        action_url=issue.get("html_url"),
        action_text="View on GitHub",
        priority=template.priority,
        metadata=details,
    )


def notify_system(
    session: Session,
    broadcaster: RealtimeBroadcaster | None,
    *,
    title: str,
    message: str,
    recipient_id: int,
    priority: str = PRIORITY_LOW,
    metadata: Mapping[str, Any] | None = None,
) -> Notification:
    return create_notification(
        session,
        broadcaster,
        recipient_id=recipient_id,
        type=NOTIFICATION_TYPE_SYSTEM_ALERT,
        title=title,
        message=message,
        priority=priority,
        metadata=metadata,
    )


def notify_weekly_report(
    session: Session,
    broadcaster: RealtimeBroadcaster | None,
    *,
    recipient_id: int,
    report_url: str,
    metadata: Mapping[str, Any] | None = None,
) -> Notification:
    return create_notification(
        session,
        broadcaster,
        recipient_id=recipient_id,
        type=NOTIFICATION_TYPE_WEEKLY_REPORT_READY,
        title="Weekly Report Ready",
        message="Your weekly report is ready for download",
        action_url=report_url,
        action_text="Download Report",
        priority=PRIORITY_MEDIUM,
        metadata=metadata,
    )


def send_bulk_notifications(
    session: Session,
    broadcaster: RealtimeBroadcaster | None,
    recipient_ids: Iterable[int],
    **fields: Any,
) -> list[Notification]:
    """Create one notification per recipient, in order.

    There is no transaction across the batch: the first failure propagates
    and the notifications created before it stay persisted.
    """

    return [
        create_notification(session, broadcaster, recipient_id=recipient_id, **fields)
        for recipient_id in recipient_ids
    ]


__all__ = [
    "MEETING_CANCELLED",
    "create_notification",
    "notify_github_event",
    "notify_meeting_event",
    "notify_system",
    "notify_task_event",
    "notify_task_moved",
    "notify_weekly_report",
    "send_bulk_notifications",
]
