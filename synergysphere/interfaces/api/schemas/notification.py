"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .task import Pagination


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    recipient_id: int
    sender_id: int | None = None
    type: str
    title: str
    message: str
    related_task_id: int | None = None
    related_meeting_id: int | None = None
    action_url: str | None = None
    action_text: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    read: bool
    read_at: datetime | None = None
    priority: str
    expires_at: datetime | None = None
    created_at: datetime | None = None


class NotificationList(BaseModel):
    notifications: list[NotificationRead]
    pagination: Pagination
    unread_count: int


class UnreadCount(BaseModel):
    unread_count: int


class CountResponse(BaseModel):
    message: str
    count: int


class NotificationStats(BaseModel):
    total: int
    unread: int
    read: int
    recent: int
    by_type: dict[str, int] = Field(default_factory=dict)


__all__ = [
    "CountResponse",
    "NotificationList",
    "NotificationRead",
    "NotificationStats",
    "UnreadCount",
]
