"""Persistence layer for meetings and their attendees."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import or_
from sqlalchemy.orm import Session

from synergysphere.domain.entities import Meeting, MeetingAttendee
from synergysphere.infrastructure.models import MeetingAttendeeModel, MeetingModel
from synergysphere.utils import ensure_app_naive_datetime, ensure_app_timezone


class MeetingRepository:
    """Provide CRUD operations for :class:`Meeting` entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_user(
        self,
        user_id: int,
        *,
        status: str | None = None,
        kind: str | None = None,
        start_from: datetime | None = None,
        start_until: datetime | None = None,
        skip: int = 0,
        limit: int = 50,
    ) -> tuple[Sequence[Meeting], int]:
        attendee_meetings = (
            self.session.query(MeetingAttendeeModel.meeting_id)
            .filter(MeetingAttendeeModel.user_id == user_id)
        )
        query = self.session.query(MeetingModel).filter(
            or_(
                MeetingModel.organizer_id == user_id,
                MeetingModel.id.in_(attendee_meetings),
            )
        )
        if status:
            query = query.filter(MeetingModel.status == status)
        if kind:
            query = query.filter(MeetingModel.kind == kind)
        if start_from is not None:
            query = query.filter(MeetingModel.start_time >= ensure_app_naive_datetime(start_from))
        if start_until is not None:
            query = query.filter(MeetingModel.start_time <= ensure_app_naive_datetime(start_until))
        total = query.count()
        query = query.order_by(MeetingModel.start_time.asc(), MeetingModel.id).offset(skip).limit(limit)
        return [self._to_entity(model) for model in query.all()], total

    def list_starting_between(
        self, start: datetime, end: datetime, *, status: str
    ) -> Sequence[Meeting]:
        query = (
            self.session.query(MeetingModel)
            .filter(MeetingModel.status == status)
            .filter(MeetingModel.start_time >= ensure_app_naive_datetime(start))
            .filter(MeetingModel.start_time <= ensure_app_naive_datetime(end))
            .order_by(MeetingModel.start_time, MeetingModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, meeting_id: int) -> Meeting | None:
        model = self.session.get(MeetingModel, meeting_id)
        return self._to_entity(model) if model else None

    def create(self, meeting: Meeting) -> Meeting:
        model = MeetingModel()
        self._apply_entity_to_model(model, meeting)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, meeting: Meeting) -> Meeting:
        model = self.session.get(MeetingModel, meeting.id)
        if model is None:
            msg = f"Meeting with id {meeting.id} not found"
            raise LookupError(msg)
        self._apply_entity_to_model(model, meeting)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, meeting_id: int) -> None:
        model = self.session.get(MeetingModel, meeting_id)
        if model is None:
            msg = f"Meeting with id {meeting_id} not found"
            raise LookupError(msg)
        self.session.delete(model)
        self.session.commit()

    @staticmethod
    def _apply_entity_to_model(model: MeetingModel, meeting: Meeting) -> None:
        model.title = meeting.title
        model.description = meeting.description
        model.start_time = ensure_app_naive_datetime(meeting.start_time)
        model.end_time = ensure_app_naive_datetime(meeting.end_time)
        model.organizer_id = meeting.organizer_id
        model.kind = meeting.kind
        model.location = meeting.location
        model.status = meeting.status
        model.notes = meeting.notes

        existing = {attendee.user_id: attendee for attendee in model.attendees}
        wanted = {attendee.user_id for attendee in meeting.attendees}
        for user_id, attendee_model in existing.items():
            if user_id not in wanted:
                model.attendees.remove(attendee_model)
        for attendee in meeting.attendees:
            attendee_model = existing.get(attendee.user_id)
            if attendee_model is None:
                attendee_model = MeetingAttendeeModel(user_id=attendee.user_id)
                model.attendees.append(attendee_model)
            attendee_model.status = attendee.status
            attendee_model.responded_at = ensure_app_naive_datetime(attendee.responded_at)
            attendee_model.joined_at = ensure_app_naive_datetime(attendee.joined_at)

    @staticmethod
    def _to_entity(model: MeetingModel) -> Meeting:
        return Meeting(
            id=model.id,
            title=model.title,
            description=model.description,
            start_time=ensure_app_timezone(model.start_time),
            end_time=ensure_app_timezone(model.end_time),
            organizer_id=model.organizer_id,
            kind=model.kind,
            location=model.location,
            status=model.status,
            notes=model.notes,
            attendees=[
                MeetingAttendee(
                    user_id=attendee.user_id,
                    status=attendee.status,
                    responded_at=ensure_app_timezone(attendee.responded_at),
                    joined_at=ensure_app_timezone(attendee.joined_at),
                )
                for attendee in model.attendees
            ],
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["MeetingRepository"]
