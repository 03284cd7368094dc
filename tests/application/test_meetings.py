"""Tests for the meeting use cases."""

from __future__ import annotations

from datetime import date, time, timedelta

import pytest

from synergysphere.application.use_cases.meetings import (
    create_meeting,
    delete_meeting,
    get_meeting,
    join_meeting,
    respond_to_meeting,
    schedule_standup,
    update_meeting,
)
from synergysphere.infrastructure.repositories import NotificationRepository
from synergysphere.utils import now_in_app_timezone


def _types(session, user_id):
    items, _ = NotificationRepository(session).list_for_user(user_id, limit=None)
    return [item.type for item in items]


def _meeting(session, broadcaster, organizer, attendees, **overrides):
    start = now_in_app_timezone() + timedelta(days=1)
    fields = {
        "title": "Planning",
        "start_time": start,
        "end_time": start + timedelta(hours=1),
        "attendee_ids": [user.id for user in attendees],
    }
    fields.update(overrides)
    return create_meeting(session, broadcaster, actor=organizer, **fields)


def test_create_invites_everyone_but_the_organizer(session, broadcaster, alice, bob):
    meeting = _meeting(session, broadcaster, alice, [alice, bob])

    assert [(a.user_id, a.status) for a in meeting.attendees] == [
        (alice.id, "accepted"),
        (bob.id, "invited"),
    ]
    assert _types(session, bob.id) == ["meeting-invite"]
    assert _types(session, alice.id) == []
    assert broadcaster.names() == ["meeting-created"]


def test_invalid_times_and_unknown_attendees_are_rejected(session, broadcaster, alice):
    start = now_in_app_timezone()
    with pytest.raises(ValueError):
        _meeting(session, broadcaster, alice, [], start_time=start, end_time=start)
    with pytest.raises(ValueError):
        _meeting(session, broadcaster, alice, [], attendee_ids=[999])


def test_only_the_organizer_can_change_a_meeting(session, broadcaster, alice, bob):
    meeting = _meeting(session, broadcaster, alice, [bob])

    with pytest.raises(PermissionError):
        update_meeting(
            session, broadcaster, meeting_id=meeting.id, actor=bob, changes={"title": "Mine"}
        )
    with pytest.raises(PermissionError):
        delete_meeting(session, broadcaster, meeting_id=meeting.id, actor=bob)


def test_cancelling_notifies_attendees_that_did_not_decline(
    session, broadcaster, alice, bob, admin
):
    meeting = _meeting(session, broadcaster, alice, [bob, admin])
    respond_to_meeting(
        session, broadcaster, meeting_id=meeting.id, actor=admin, status="declined"
    )

    update_meeting(
        session,
        broadcaster,
        meeting_id=meeting.id,
        actor=alice,
        changes={"status": "cancelled"},
    )

    assert _types(session, bob.id).count("system-alert") == 1
    assert "system-alert" not in _types(session, admin.id)


def test_adding_attendees_only_invites_newcomers(session, broadcaster, alice, bob, admin):
    meeting = _meeting(session, broadcaster, alice, [bob])
    respond_to_meeting(
        session, broadcaster, meeting_id=meeting.id, actor=bob, status="accepted"
    )

    updated = update_meeting(
        session,
        broadcaster,
        meeting_id=meeting.id,
        actor=alice,
        changes={"attendee_ids": [bob.id, admin.id]},
    )

    assert updated.attendee(bob.id).status == "accepted"
    assert _types(session, bob.id) == ["meeting-invite"]
    assert _types(session, admin.id) == ["meeting-invite"]


def test_respond_join_and_visibility(session, broadcaster, alice, bob, admin):
    meeting = _meeting(session, broadcaster, alice, [bob])
    outsider_meeting = _meeting(session, broadcaster, alice, [])

    with pytest.raises(ValueError):
        respond_to_meeting(
            session, broadcaster, meeting_id=meeting.id, actor=bob, status="maybe"
        )
    with pytest.raises(LookupError):
        join_meeting(session, broadcaster, meeting_id=outsider_meeting.id, actor=bob)
    with pytest.raises(PermissionError):
        get_meeting(session, meeting_id=outsider_meeting.id, actor=bob)
    assert get_meeting(session, meeting_id=outsider_meeting.id, actor=admin).id

    joined = join_meeting(session, broadcaster, meeting_id=meeting.id, actor=bob)
    assert joined.attendee(bob.id).status == "attended"
    assert joined.attendee(bob.id).joined_at is not None


def test_schedule_standup_invites_active_members(session, broadcaster, alice, bob):
    meeting = schedule_standup(
        session, broadcaster, actor=alice, day=date(2026, 10, 19), start=time(9, 30)
    )

    assert meeting.kind == "standup"
    assert meeting.end_time - meeting.start_time == timedelta(minutes=30)
    assert {attendee.user_id for attendee in meeting.attendees} == {alice.id, bob.id}
    assert _types(session, bob.id) == ["meeting-invite"]


def test_delete_announces_and_emits(session, broadcaster, alice, bob):
    meeting = _meeting(session, broadcaster, alice, [bob])

    delete_meeting(session, broadcaster, meeting_id=meeting.id, actor=alice)

    assert "system-alert" in _types(session, bob.id)
    assert ("meeting-deleted", None, {"id": meeting.id}) in broadcaster.events
