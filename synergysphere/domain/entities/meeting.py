"""Domain entities describing meetings and their attendees."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Final

MEETING_STATUS_SCHEDULED: Final[str] = "scheduled"
MEETING_STATUS_IN_PROGRESS: Final[str] = "in-progress"
MEETING_STATUS_COMPLETED: Final[str] = "completed"
MEETING_STATUS_CANCELLED: Final[str] = "cancelled"
MEETING_STATUSES: Final[tuple[str, ...]] = (
    MEETING_STATUS_SCHEDULED,
    MEETING_STATUS_IN_PROGRESS,
    MEETING_STATUS_COMPLETED,
    MEETING_STATUS_CANCELLED,
)

MEETING_KINDS: Final[tuple[str, ...]] = (
    "standup",
    "planning",
    "review",
    "retrospective",
    "general",
)

ATTENDEE_INVITED: Final[str] = "invited"
ATTENDEE_ACCEPTED: Final[str] = "accepted"
ATTENDEE_DECLINED: Final[str] = "declined"
ATTENDEE_ATTENDED: Final[str] = "attended"
ATTENDEE_STATUSES: Final[tuple[str, ...]] = (
    ATTENDEE_INVITED,
    ATTENDEE_ACCEPTED,
    ATTENDEE_DECLINED,
    ATTENDEE_ATTENDED,
    "no-show",
)


@dataclass
class MeetingAttendee:
    """Invitation state of a user for a meeting."""

    user_id: int
    status: str = ATTENDEE_INVITED
    responded_at: datetime | None = None
    joined_at: datetime | None = None


@dataclass
class Meeting:
    """Scheduled meeting organised by a user."""

    id: int | None
    title: str
    start_time: datetime
    end_time: datetime
    organizer_id: int
    description: str | None = None
    kind: str = "general"
    location: str | None = None
    status: str = MEETING_STATUS_SCHEDULED
    notes: str | None = None
    attendees: list[MeetingAttendee] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def attendee(self, user_id: int) -> MeetingAttendee | None:
        for attendee in self.attendees:
            if attendee.user_id == user_id:
                return attendee
        return None

    def is_participant(self, user_id: int) -> bool:
        return self.organizer_id == user_id or self.attendee(user_id) is not None

    def reminder_recipient_ids(self) -> list[int]:
        """Return attendees that have not declined the invitation."""

        return [
            attendee.user_id
            for attendee in self.attendees
            if attendee.status != ATTENDEE_DECLINED
        ]


__all__ = [
    "ATTENDEE_ACCEPTED",
    "ATTENDEE_ATTENDED",
    "ATTENDEE_DECLINED",
    "ATTENDEE_INVITED",
    "ATTENDEE_STATUSES",
    "MEETING_KINDS",
    "MEETING_STATUSES",
    "MEETING_STATUS_CANCELLED",
    "MEETING_STATUS_COMPLETED",
    "MEETING_STATUS_IN_PROGRESS",
    "MEETING_STATUS_SCHEDULED",
    "Meeting",
    "MeetingAttendee",
]
