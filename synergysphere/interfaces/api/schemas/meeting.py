"""Pydantic models for meetings."""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .task import Pagination

MeetingKind = Literal["standup", "planning", "review", "retrospective", "general"]
MeetingStatus = Literal["scheduled", "in-progress", "completed", "cancelled"]


class MeetingAttendeeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: int
    status: str
    responded_at: datetime | None = None
    joined_at: datetime | None = None


class MeetingCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    start_time: datetime
    end_time: datetime
    type: MeetingKind = "general"
    location: str | None = Field(default=None, max_length=200)
    attendees: list[int] = Field(default_factory=list)


class MeetingUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=1000)
    start_time: datetime | None = None
    end_time: datetime | None = None
    type: MeetingKind | None = None
    location: str | None = Field(default=None, max_length=200)
    status: MeetingStatus | None = None
    notes: str | None = None
    attendees: list[int] | None = None


class MeetingRespond(BaseModel):
    status: Literal["accepted", "declined"]


class StandupCreate(BaseModel):
    day: date
    start: time = time(9, 0)
    duration: int = Field(default=30, gt=0, le=480, description="Minutes")


class MeetingRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None = None
    start_time: datetime
    end_time: datetime
    organizer_id: int
    type: str = Field(validation_alias="kind")
    location: str | None = None
    status: str
    notes: str | None = None
    attendees: list[MeetingAttendeeRead] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


class MeetingList(BaseModel):
    meetings: list[MeetingRead]
    pagination: Pagination


__all__ = [
    "MeetingAttendeeRead",
    "MeetingCreate",
    "MeetingList",
    "MeetingRead",
    "MeetingRespond",
    "MeetingUpdate",
    "StandupCreate",
]
