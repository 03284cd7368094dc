"""Pydantic models for tasks, their feedback and their activity log."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

TaskStatus = Literal["todo", "in-progress", "done"]
TaskPriority = Literal["low", "medium", "high"]
FeedbackKind = Literal["comment", "progress", "blocker"]


class TaskFeedbackCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=1000)
    type: FeedbackKind = "comment"


class TaskFeedbackRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    content: str
    kind: str
    created_at: datetime | None = None


class TaskActivityRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    action: str
    details: str | None = None
    created_at: datetime | None = None


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    status: TaskStatus = "todo"
    priority: TaskPriority = "medium"
    assignee_id: int | None = None
    due_date: datetime | None = None
    tags: list[str] = Field(default_factory=list)
    estimated_hours: float | None = Field(default=None, ge=0)


class TaskUpdate(BaseModel):
    """Partial update; only the fields sent by the client are applied."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=2000)
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    assignee_id: int | None = None
    due_date: datetime | None = None
    tags: list[str] | None = None
    estimated_hours: float | None = Field(default=None, ge=0)
    actual_hours: float | None = Field(default=None, ge=0)


class TaskRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None = None
    status: str
    priority: str
    creator_id: int
    assignee_id: int | None = None
    due_date: datetime | None = None
    completed_at: datetime | None = None
    tags: list[str] = Field(default_factory=list)
    estimated_hours: float | None = None
    actual_hours: float | None = None
    github_issue_id: int | None = None
    github_issue_number: int | None = None
    github_repository: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    feedback: list[TaskFeedbackRead] = Field(default_factory=list)
    activity: list[TaskActivityRead] = Field(default_factory=list)


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class TaskList(BaseModel):
    tasks: list[TaskRead]
    pagination: Pagination


__all__ = [
    "Pagination",
    "TaskActivityRead",
    "TaskCreate",
    "TaskFeedbackCreate",
    "TaskFeedbackRead",
    "TaskList",
    "TaskRead",
    "TaskUpdate",
]
