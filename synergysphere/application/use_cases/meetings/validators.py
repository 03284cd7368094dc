"""Validation helpers shared by the meeting use cases."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from sqlalchemy.orm import Session

from synergysphere.domain.entities import (
    ATTENDEE_ACCEPTED,
    MEETING_KINDS,
    MEETING_STATUSES,
    Meeting,
    MeetingAttendee,
    User,
)
from synergysphere.infrastructure.repositories import MeetingRepository, UserRepository

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000


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


def validate_time_range(start_time: datetime, end_time: datetime) -> None:
    if start_time >= end_time:
        raise ValueError("End time must be after start time")


def validate_kind(kind: str) -> str:
    if kind not in MEETING_KINDS:
        raise ValueError(f"Invalid meeting type '{kind}'")
    return kind


def validate_status(status: str) -> str:
    if status not in MEETING_STATUSES:
        raise ValueError(f"Invalid meeting status '{status}'")
    return status


def build_attendees(
    session: Session,
    organizer_id: int,
    attendee_ids: Iterable[int],
    *,
    previous: Iterable[MeetingAttendee] = (),
) -> list[MeetingAttendee]:
    """Return the attendee list with the organizer first and accepted.

    Attendees already present in ``previous`` keep their response.
    """

    kept = {attendee.user_id: attendee for attendee in previous}
    ordered: list[int] = []
    for user_id in attendee_ids:
        if user_id != organizer_id and user_id not in ordered:
            ordered.append(user_id)

    known = UserRepository(session).get_map_by_ids(ordered)
    missing = [user_id for user_id in ordered if user_id not in known]
    if missing:
        raise ValueError(f"Unknown attendees: {', '.join(str(item) for item in missing)}")

    attendees = [MeetingAttendee(user_id=organizer_id, status=ATTENDEE_ACCEPTED)]
    if organizer_id in kept:
        attendees[0].responded_at = kept[organizer_id].responded_at
        attendees[0].joined_at = kept[organizer_id].joined_at
    for user_id in ordered:
        attendees.append(kept.get(user_id) or MeetingAttendee(user_id=user_id))
    return attendees


def get_meeting_or_raise(session: Session, meeting_id: int) -> Meeting:
    meeting = MeetingRepository(session).get(meeting_id)
    if meeting is None:
        raise LookupError("Meeting not found")
    return meeting


def ensure_organizer(meeting: Meeting, actor: User, action: str) -> None:
    if meeting.organizer_id != actor.id:
        raise PermissionError(f"Only the organizer can {action} this meeting")


def ensure_participant(meeting: Meeting, actor: User) -> None:
    if not meeting.is_participant(actor.id) and not actor.is_admin():
        raise PermissionError("Not authorized to view this meeting")
