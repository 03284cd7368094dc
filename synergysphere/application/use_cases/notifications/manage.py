"""Use cases for reading and maintaining a user's notifications."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from synergysphere.domain.entities import Notification
from synergysphere.infrastructure.repositories import NotificationRepository
from synergysphere.utils import now_in_app_timezone

logger = logging.getLogger(__name__)


def _get_owned(session: Session, notification_id: int, user_id: int) -> Notification:
    notification = NotificationRepository(session).get(notification_id)
    if notification is None:
        raise LookupError("Notification not found")
    if notification.recipient_id != user_id:
        raise PermissionError("Not authorized to access this notification")
    return notification


def list_notifications(
    session: Session,
    *,
    user_id: int,
    read: bool | None = None,
    type: str | None = None,
    page: int = 1,
    limit: int = 20,
) -> tuple[Sequence[Notification], int]:
    """Return a page of the user's unexpired notifications and the total."""

    if page < 1 or limit < 1:
        raise ValueError("page and limit must be positive")
    return NotificationRepository(session).list_for_user(
        user_id, read=read, type=type, skip=(page - 1) * limit, limit=limit
    )


def get_notification(session: Session, *, notification_id: int, user_id: int) -> Notification:
    return _get_owned(session, notification_id, user_id)


def mark_notification_read(
    session: Session, *, notification_id: int, user_id: int
) -> Notification:
    notification = _get_owned(session, notification_id, user_id)
    if notification.read:
        return notification
    return NotificationRepository(session).set_read_state(notification_id, read=True)


def mark_notification_unread(
    session: Session, *, notification_id: int, user_id: int
) -> Notification:
    _get_owned(session, notification_id, user_id)
    return NotificationRepository(session).set_read_state(notification_id, read=False)


def mark_all_notifications_read(session: Session, *, user_id: int) -> int:
    """Mark every unread notification of ``user_id`` read; other users are untouched."""

    return NotificationRepository(session).mark_all_as_read(user_id)


def acknowledge_notifications(session: Session, *, user_id: int, ids: Sequence[Any]) -> int:
    """Mark the listed notifications read, ignoring ids owned by other users."""

    return NotificationRepository(session).mark_as_read(ids, user_id=user_id)


def get_unread_count(session: Session, *, user_id: int) -> int:
    return NotificationRepository(session).count_unread(user_id)


def list_unread_notifications(session: Session, *, user_id: int) -> Sequence[Notification]:
    return NotificationRepository(session).list_unread_for_user(user_id)


def delete_notification(session: Session, *, notification_id: int, user_id: int) -> None:
    _get_owned(session, notification_id, user_id)
    NotificationRepository(session).delete(notification_id)


def clear_read_notifications(session: Session, *, user_id: int) -> int:
    return NotificationRepository(session).delete_read(user_id)


def notification_types_for_user(session: Session, *, user_id: int) -> list[str]:
    return NotificationRepository(session).distinct_types(user_id)


def notification_stats(session: Session, *, user_id: int) -> dict[str, Any]:
    return NotificationRepository(session).stats(user_id)


def cleanup_expired_notifications(session: Session, now: datetime | None = None) -> int:
    """Delete notifications whose ``expires_at`` is strictly before ``now``."""

    deleted = NotificationRepository(session).delete_expired(now or now_in_app_timezone())
    logger.info("Cleaned up %d expired notifications", deleted)
    return deleted


__all__ = [
    "acknowledge_notifications",
    "cleanup_expired_notifications",
    "clear_read_notifications",
    "delete_notification",
    "get_notification",
    "get_unread_count",
    "list_notifications",
    "list_unread_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
    "mark_notification_unread",
    "notification_stats",
    "notification_types_for_user",
]
