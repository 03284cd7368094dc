"""Tests for the notification factory and notification management use cases."""

from __future__ import annotations

from datetime import timedelta

import pytest

from synergysphere.application.use_cases.notifications import (
    MEETING_CANCELLED,
    acknowledge_notifications,
    cleanup_expired_notifications,
    create_notification,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
    mark_notification_unread,
    notify_meeting_event,
    notify_system,
    send_bulk_notifications,
)
from synergysphere.domain.entities import Meeting
from synergysphere.infrastructure.repositories import NotificationRepository
from synergysphere.utils import now_in_app_timezone


def _notify(session, broadcaster, recipient_id, **overrides):
    fields = {
        "type": "system-alert",
        "title": "Heads up",
        "message": "Something happened",
    }
    fields.update(overrides)
    return create_notification(session, broadcaster, recipient_id=recipient_id, **fields)


def test_create_notification_defaults_expiry_and_pushes(session, broadcaster, alice):
    before = now_in_app_timezone()
    notification = _notify(session, broadcaster, alice.id)

    assert notification.id is not None
    assert notification.read is False
    assert notification.read_at is None
    assert notification.expires_at is not None
    assert notification.expires_at >= before + timedelta(days=29)
    assert broadcaster.notifications == [notification]


@pytest.mark.parametrize(
    "overrides",
    [
        {"type": "not-a-type"},
        {"priority": "critical"},
        {"title": ""},
        {"title": "x" * 201},
        {"message": "   "},
        {"message": "x" * 1001},
    ],
)
def test_create_notification_rejects_invalid_fields(session, broadcaster, alice, overrides):
    with pytest.raises(ValueError):
        _notify(session, broadcaster, alice.id, **overrides)
    assert broadcaster.notifications == []


def test_read_flag_and_timestamp_move_together(session, alice):
    notification = _notify(session, None, alice.id)

    read = mark_notification_read(session, notification_id=notification.id, user_id=alice.id)
    assert read.read is True
    assert read.read_at is not None

    unread = mark_notification_unread(
        session, notification_id=notification.id, user_id=alice.id
    )
    assert unread.read is False
    assert unread.read_at is None


def test_other_users_cannot_touch_a_notification(session, alice, bob):
    notification = _notify(session, None, alice.id)

    with pytest.raises(PermissionError):
        mark_notification_read(session, notification_id=notification.id, user_id=bob.id)
    with pytest.raises(LookupError):
        mark_notification_read(session, notification_id=9999, user_id=alice.id)


def test_cleanup_removes_exactly_the_expired_notifications(session, alice):
    now = now_in_app_timezone()
    expired = _notify(session, None, alice.id, expires_at=now - timedelta(seconds=1))
    boundary = _notify(session, None, alice.id, expires_at=now)
    fresh = _notify(session, None, alice.id, expires_at=now + timedelta(days=1))

    assert cleanup_expired_notifications(session, now) == 1
    assert cleanup_expired_notifications(session, now) == 0

    repository = NotificationRepository(session)
    assert repository.get(expired.id) is None
    assert repository.get(boundary.id) is not None
    assert repository.get(fresh.id) is not None


def test_mark_all_read_only_affects_the_recipient(session, alice, bob):
    already_read = _notify(session, None, alice.id)
    mark_notification_read(session, notification_id=already_read.id, user_id=alice.id)
    _notify(session, None, alice.id)
    _notify(session, None, alice.id)
    bobs = _notify(session, None, bob.id)

    assert mark_all_notifications_read(session, user_id=alice.id) == 2

    repository = NotificationRepository(session)
    assert repository.count_unread(alice.id) == 0
    assert repository.count_unread(bob.id) == 1
    assert repository.get(bobs.id).read_at is None
    assert all(
        item.read and item.read_at is not None
        for item in repository.list_for_user(alice.id)[0]
    )


def test_acknowledge_ignores_foreign_and_malformed_ids(session, alice, bob):
    mine = _notify(session, None, alice.id)
    theirs = _notify(session, None, bob.id)

    count = acknowledge_notifications(
        session, user_id=alice.id, ids=[mine.id, theirs.id, "abc", None]
    )

    assert count == 1
    repository = NotificationRepository(session)
    assert repository.get(mine.id).read is True
    assert repository.get(theirs.id).read is False


def test_list_filters_and_hides_expired(session, alice):
    now = now_in_app_timezone()
    _notify(session, None, alice.id, expires_at=now - timedelta(minutes=1))
    _notify(session, None, alice.id, type="task-updated")
    visible = _notify(session, None, alice.id)
    mark_notification_read(session, notification_id=visible.id, user_id=alice.id)

    items, total = list_notifications(session, user_id=alice.id)
    assert total == 2

    unread, unread_total = list_notifications(session, user_id=alice.id, read=False)
    assert unread_total == 1
    assert unread[0].type == "task-updated"

    with pytest.raises(ValueError):
        list_notifications(session, user_id=alice.id, page=0)


def test_meeting_cancellation_is_delivered_as_system_alert(session, alice, bob):
    start = now_in_app_timezone() + timedelta(days=1)
    meeting = Meeting(
        id=7,
        title="Planning",
        start_time=start,
        end_time=start + timedelta(hours=1),
        organizer_id=alice.id,
    )

    notification = notify_meeting_event(
        session, None, MEETING_CANCELLED, meeting, bob.id, sender_id=alice.id
    )

    assert notification.type == "system-alert"
    assert notification.title == "Meeting Cancelled"
    assert notification.related_meeting_id == 7


def test_bulk_notifications_keep_earlier_records_on_failure(session, alice, bob):
    with pytest.raises(ValueError):
        send_bulk_notifications(
            session,
            None,
            [alice.id, None, bob.id],
            type="system-alert",
            title="Maintenance",
            message="Tonight at 22:00",
        )

    repository = NotificationRepository(session)
    assert repository.count_unread(alice.id) == 1
    assert repository.count_unread(bob.id) == 0


def test_notify_system_uses_low_priority(session, alice):
    notification = notify_system(
        session, None, title="Welcome", message="Glad to have you", recipient_id=alice.id
    )
    assert notification.priority == "low"
    assert notification.type == "system-alert"
