"""Use cases for scheduling meetings and tracking attendance."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import asdict, replace
from datetime import date, datetime, time, timedelta
from typing import Any, Iterable, Mapping

from sqlalchemy.orm import Session

from synergysphere.application.use_cases.notifications import (
    MEETING_CANCELLED,
    notify_meeting_event,
)
from synergysphere.domain.entities import (
    ATTENDEE_ACCEPTED,
    ATTENDEE_ATTENDED,
    ATTENDEE_DECLINED,
    MEETING_STATUS_CANCELLED,
    NOTIFICATION_TYPE_MEETING_INVITE,
    Meeting,
    User,
)
from synergysphere.infrastructure.realtime import RealtimeBroadcaster
from synergysphere.infrastructure.repositories import MeetingRepository, UserRepository
from synergysphere.utils import ensure_app_timezone, now_in_app_timezone

from .validators import (
    build_attendees,
    ensure_organizer,
    ensure_participant,
    get_meeting_or_raise,
    validate_description,
    validate_kind,
    validate_status,
    validate_time_range,
    validate_title,
)

logger = logging.getLogger(__name__)

_EDITABLE_FIELDS = {
    "title",
    "description",
    "start_time",
    "end_time",
    "kind",
    "location",
    "status",
    "notes",
    "attendee_ids",
}


def _emit(broadcaster: RealtimeBroadcaster | None, event: str, meeting: Meeting) -> None:
    if broadcaster is not None:
        broadcaster.emit(event, asdict(meeting))


def _invite(
    session: Session,
    broadcaster: RealtimeBroadcaster | None,
    meeting: Meeting,
    user_ids: Iterable[int],
    *,
    sender_id: int,
) -> None:
    for user_id in user_ids:
        if user_id == sender_id:
            continue
        notify_meeting_event(
            session,
            broadcaster,
            NOTIFICATION_TYPE_MEETING_INVITE,
            meeting,
            user_id,
            sender_id=sender_id,
        )


def _announce_cancellation(
    session: Session,
    broadcaster: RealtimeBroadcaster | None,
    meeting: Meeting,
    *,
    sender_id: int,
) -> None:
    for attendee in meeting.attendees:
        if attendee.user_id == sender_id or attendee.status == ATTENDEE_DECLINED:
            continue
        notify_meeting_event(
            session,
            broadcaster,
            MEETING_CANCELLED,
            meeting,
            attendee.user_id,
            sender_id=sender_id,
        )


def create_meeting(
    session: Session,
    broadcaster: RealtimeBroadcaster | None,
    *,
    actor: User,
    title: str,
    start_time: datetime,
    end_time: datetime,
    description: str | None = None,
    kind: str = "general",
    location: str | None = None,
    attendee_ids: Sequence[int] = (),
) -> Meeting:
    """Schedule a meeting organised by ``actor`` and invite the attendees."""

    start_time = ensure_app_timezone(start_time)
    end_time = ensure_app_timezone(end_time)
    validate_time_range(start_time, end_time)
    meeting = Meeting(
        id=None,
        title=validate_title(title),
        description=validate_description(description),
        start_time=start_time,
        end_time=end_time,
        organizer_id=actor.id,
        kind=validate_kind(kind),
        location=location,
        attendees=build_attendees(session, actor.id, attendee_ids),
    )
    created = MeetingRepository(session).create(meeting)
    _invite(
        session,
        broadcaster,
        created,
        [attendee.user_id for attendee in created.attendees],
        sender_id=actor.id,
    )
    _emit(broadcaster, "meeting-created", created)
    return created


def schedule_standup(
    session: Session,
    broadcaster: RealtimeBroadcaster | None,
    *,
    actor: User,
    day: date,
    start: time = time(9, 0),
    duration_minutes: int = 30,
) -> Meeting:
    """Schedule a daily standup with every active team member."""

    if duration_minutes <= 0:
        raise ValueError("duration must be positive")
    start_time = ensure_app_timezone(datetime.combine(day, start))
    members = [user.id for user in UserRepository(session).list_active()]
    return create_meeting(
        session,
        broadcaster,
        actor=actor,
        title="Daily Standup",
        description="Daily team standup meeting",
        start_time=start_time,
        end_time=start_time + timedelta(minutes=duration_minutes),
        kind="standup",
        attendee_ids=members,
    )


def list_meetings(
    session: Session,
    *,
    user_id: int,
    status: str | None = None,
    kind: str | None = None,
    start_from: datetime | None = None,
    start_until: datetime | None = None,
    page: int = 1,
    limit: int = 50,
) -> tuple[Sequence[Meeting], int]:
    if page < 1 or limit < 1:
        raise ValueError("page and limit must be positive")
    return MeetingRepository(session).list_for_user(
        user_id,
        status=status,
        kind=kind,
        start_from=start_from,
        start_until=start_until,
        skip=(page - 1) * limit,
        limit=limit,
    )


def get_meeting(session: Session, *, meeting_id: int, actor: User) -> Meeting:
    meeting = get_meeting_or_raise(session, meeting_id)
    ensure_participant(meeting, actor)
    return meeting


def update_meeting(
    session: Session,
    broadcaster: RealtimeBroadcaster | None,
    *,
    meeting_id: int,
    actor: User,
    changes: Mapping[str, Any],
) -> Meeting:
    """Apply ``changes`` to a meeting; only the organizer may do so.

    New attendees receive an invitation and switching the status to
    ``cancelled`` notifies everyone who had not declined.
    """

    current = get_meeting_or_raise(session, meeting_id)
    ensure_organizer(current, actor, "update")

    unknown = set(changes) - _EDITABLE_FIELDS
    if unknown:
        raise ValueError(f"Unknown meeting fields: {', '.join(sorted(unknown))}")

    values = dict(changes)
    if "title" in values:
        values["title"] = validate_title(values["title"])
    if "description" in values:
        values["description"] = validate_description(values["description"])
    if "kind" in values:
        values["kind"] = validate_kind(values["kind"])
    if "status" in values:
        values["status"] = validate_status(values["status"])
    attendee_ids = values.pop("attendee_ids", None)
    if attendee_ids is not None:
        values["attendees"] = build_attendees(
            session, current.organizer_id, attendee_ids, previous=current.attendees
        )

    for key in ("start_time", "end_time"):
        if key in values:
            values[key] = ensure_app_timezone(values[key])
    meeting = replace(current, **values)
    validate_time_range(meeting.start_time, meeting.end_time)
    updated = MeetingRepository(session).update(meeting)

    previous_ids = {attendee.user_id for attendee in current.attendees}
    _invite(
        session,
        broadcaster,
        updated,
        [
            attendee.user_id
            for attendee in updated.attendees
            if attendee.user_id not in previous_ids
        ],
        sender_id=actor.id,
    )
    if (
        updated.status == MEETING_STATUS_CANCELLED
        and current.status != MEETING_STATUS_CANCELLED
    ):
        _announce_cancellation(session, broadcaster, updated, sender_id=actor.id)

    _emit(broadcaster, "meeting-updated", updated)
    return updated


def delete_meeting(
    session: Session,
    broadcaster: RealtimeBroadcaster | None,
    *,
    meeting_id: int,
    actor: User,
) -> None:
    meeting = get_meeting_or_raise(session, meeting_id)
    ensure_organizer(meeting, actor, "delete")

    MeetingRepository(session).delete(meeting_id)
    if meeting.status != MEETING_STATUS_CANCELLED:
        _announce_cancellation(session, broadcaster, meeting, sender_id=actor.id)
    if broadcaster is not None:
        broadcaster.emit("meeting-deleted", {"id": meeting_id})
    logger.info("Meeting %s deleted by user %s", meeting_id, actor.id)


def respond_to_meeting(
    session: Session,
    broadcaster: RealtimeBroadcaster | None,
    *,
    meeting_id: int,
    actor: User,
    status: str,
) -> Meeting:
    if status not in (ATTENDEE_ACCEPTED, ATTENDEE_DECLINED):
        raise ValueError("Status must be accepted or declined")
    meeting = get_meeting_or_raise(session, meeting_id)
    attendee = meeting.attendee(actor.id)
    if attendee is None:
        raise LookupError("You are not an attendee of this meeting")

    attendee.status = status
    attendee.responded_at = now_in_app_timezone()
    updated = MeetingRepository(session).update(meeting)
    _emit(broadcaster, "meeting-updated", updated)
    return updated


def join_meeting(
    session: Session,
    broadcaster: RealtimeBroadcaster | None,
    *,
    meeting_id: int,
    actor: User,
) -> Meeting:
    meeting = get_meeting_or_raise(session, meeting_id)
    attendee = meeting.attendee(actor.id)
    if attendee is None:
        raise LookupError("You are not an attendee of this meeting")

    attendee.status = ATTENDEE_ATTENDED
    attendee.joined_at = now_in_app_timezone()
    updated = MeetingRepository(session).update(meeting)
    _emit(broadcaster, "meeting-updated", updated)
    return updated


__all__ = [
    "create_meeting",
    "delete_meeting",
    "get_meeting",
    "join_meeting",
    "list_meetings",
    "respond_to_meeting",
    "schedule_standup",
    "update_meeting",
]
