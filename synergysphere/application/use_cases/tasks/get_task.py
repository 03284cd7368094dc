"""Use cases for reading tasks."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from synergysphere.domain.entities import Task
from synergysphere.infrastructure.repositories import TaskRepository

from .validators import get_task_or_raise


def get_task(session: Session, *, task_id: int) -> Task:
    return get_task_or_raise(session, task_id)


def list_tasks(
    session: Session,
    *,
    status: str | None = None,
    priority: str | None = None,
    assignee_id: int | None = None,
    search: str | None = None,
    sort_by: str = "createdAt",
    sort_order: str = "desc",
    page: int = 1,
    limit: int = 50,
) -> tuple[Sequence[Task], int]:
    """Return a filtered page of tasks and the total number of matches."""

    if page < 1 or limit < 1:
        raise ValueError("page and limit must be positive")
    if sort_order not in ("asc", "desc"):
        raise ValueError("sort_order must be 'asc' or 'desc'")
    return TaskRepository(session).list(
        status=status,
        priority=priority,
        assignee_id=assignee_id,
        search=search,
        sort_by=sort_by,
        descending=sort_order == "desc",
        skip=(page - 1) * limit,
        limit=limit,
    )
