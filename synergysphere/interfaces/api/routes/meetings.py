"""Endpoints for scheduling meetings."""

from __future__ import annotations

import math
from datetime import datetime

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from synergysphere.application.use_cases.meetings import (
    create_meeting as create_meeting_uc,
    delete_meeting as delete_meeting_uc,
    get_meeting as get_meeting_uc,
    join_meeting as join_meeting_uc,
    list_meetings as list_meetings_uc,
    respond_to_meeting as respond_to_meeting_uc,
    schedule_standup as schedule_standup_uc,
    update_meeting as update_meeting_uc,
)
from synergysphere.domain.entities import User
from synergysphere.infrastructure.database import get_db
from synergysphere.infrastructure.realtime import RealtimeBroadcaster
from synergysphere.interfaces.api.dependencies import (
    get_broadcaster,
    get_current_active_user,
)
from synergysphere.interfaces.api.errors import translate_errors
from synergysphere.interfaces.api.schemas import (
    MeetingCreate,
    MeetingList,
    MeetingRead,
    MeetingRespond,
    MeetingUpdate,
    Pagination,
    StandupCreate,
)

router = APIRouter(prefix="/meetings", tags=["meetings"])


@router.get("/", response_model=MeetingList)
def list_meetings(
    status_filter: str | None = Query(default=None, alias="status"),
    kind: str | None = Query(default=None, alias="type"),
    start_date: datetime | None = Query(default=None, alias="startDate"),
    end_date: datetime | None = Query(default=None, alias="endDate"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=200),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> MeetingList:
    """Return the meetings the user organises or attends."""

    with translate_errors():
        meetings, total = list_meetings_uc(
            db,
            user_id=current_user.id,
            status=status_filter,
            kind=kind,
            start_from=start_date,
            start_until=end_date,
            page=page,
            limit=limit,
        )
    return MeetingList(
        meetings=[MeetingRead.model_validate(meeting) for meeting in meetings],
        pagination=Pagination(
            page=page, limit=limit, total=total, pages=math.ceil(total / limit)
        ),
    )


@router.post("/", response_model=MeetingRead, status_code=status.HTTP_201_CREATED)
def create_meeting(
    payload: MeetingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    broadcaster: RealtimeBroadcaster = Depends(get_broadcaster),
) -> MeetingRead:
    with translate_errors():
        meeting = create_meeting_uc(
            db,
            broadcaster,
            actor=current_user,
            title=payload.title,
            description=payload.description,
            start_time=payload.start_time,
            end_time=payload.end_time,
            kind=payload.type,
            location=payload.location,
            attendee_ids=payload.attendees,
        )
    return MeetingRead.model_validate(meeting)


@router.post(
    "/schedule-standup", response_model=MeetingRead, status_code=status.HTTP_201_CREATED
)
def schedule_standup(
    payload: StandupCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    broadcaster: RealtimeBroadcaster = Depends(get_broadcaster),
) -> MeetingRead:
    with translate_errors():
        meeting = schedule_standup_uc(
            db,
            broadcaster,
            actor=current_user,
            day=payload.day,
            start=payload.start,
            duration_minutes=payload.duration,
        )
    return MeetingRead.model_validate(meeting)


@router.get("/{meeting_id}", response_model=MeetingRead)
def read_meeting(
    meeting_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> MeetingRead:
    with translate_errors():
        meeting = get_meeting_uc(db, meeting_id=meeting_id, actor=current_user)
    return MeetingRead.model_validate(meeting)


@router.put("/{meeting_id}", response_model=MeetingRead)
def update_meeting(
    meeting_id: int,
    payload: MeetingUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    broadcaster: RealtimeBroadcaster = Depends(get_broadcaster),
) -> MeetingRead:
    changes = payload.model_dump(exclude_unset=True)
    if "type" in changes:
        changes["kind"] = changes.pop("type")
    if "attendees" in changes:
        changes["attendee_ids"] = changes.pop("attendees")
    with translate_errors():
        meeting = update_meeting_uc(
            db,
            broadcaster,
            meeting_id=meeting_id,
            actor=current_user,
            changes=changes,
        )
    return MeetingRead.model_validate(meeting)


@router.delete("/{meeting_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_meeting(
    meeting_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    broadcaster: RealtimeBroadcaster = Depends(get_broadcaster),
) -> Response:
    with translate_errors():
        delete_meeting_uc(db, broadcaster, meeting_id=meeting_id, actor=current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{meeting_id}/respond", response_model=MeetingRead)
def respond_to_meeting(
    meeting_id: int,
    payload: MeetingRespond,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    broadcaster: RealtimeBroadcaster = Depends(get_broadcaster),
) -> MeetingRead:
    with translate_errors():
        meeting = respond_to_meeting_uc(
            db,
            broadcaster,
            meeting_id=meeting_id,
            actor=current_user,
            status=payload.status,
        )
    return MeetingRead.model_validate(meeting)


@router.post("/{meeting_id}/join", response_model=MeetingRead)
def join_meeting(
    meeting_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    broadcaster: RealtimeBroadcaster = Depends(get_broadcaster),
) -> MeetingRead:
    with translate_errors():
        meeting = join_meeting_uc(
            db, broadcaster, meeting_id=meeting_id, actor=current_user
        )
    return MeetingRead.model_validate(meeting)
