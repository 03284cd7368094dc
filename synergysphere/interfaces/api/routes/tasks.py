"""Endpoints for the kanban task board."""

from __future__ import annotations

import math

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from synergysphere.application.use_cases.tasks import (
    add_feedback as add_feedback_uc,
    create_task as create_task_uc,
    delete_task as delete_task_uc,
    get_task as get_task_uc,
    list_tasks as list_tasks_uc,
    update_task as update_task_uc,
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
    Pagination,
    TaskCreate,
    TaskFeedbackCreate,
    TaskList,
    TaskRead,
    TaskUpdate,
)

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("/", response_model=TaskList)
def list_tasks(
    status_filter: str | None = Query(default=None, alias="status"),
    priority: str | None = None,
    assignee: int | None = None,
    search: str | None = None,
    sort_by: str = Query(default="createdAt", alias="sortBy"),
    sort_order: str = Query(default="desc", alias="sortOrder"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=200),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> TaskList:
    with translate_errors():
        tasks, total = list_tasks_uc(
            db,
            status=status_filter,
            priority=priority,
            assignee_id=assignee,
            search=search,
            sort_by=sort_by,
            sort_order=sort_order,
            page=page,
            limit=limit,
        )
    return TaskList(
        tasks=[TaskRead.model_validate(task) for task in tasks],
        pagination=Pagination(
            page=page, limit=limit, total=total, pages=math.ceil(total / limit)
        ),
    )


@router.post("/", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def create_task(
    payload: TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    broadcaster: RealtimeBroadcaster = Depends(get_broadcaster),
) -> TaskRead:
    with translate_errors():
        task = create_task_uc(
            db,
            broadcaster,
            actor=current_user,
            title=payload.title,
            description=payload.description,
            status=payload.status,
            priority=payload.priority,
            assignee_id=payload.assignee_id,
            due_date=payload.due_date,
            tags=payload.tags,
            estimated_hours=payload.estimated_hours,
        )
    return TaskRead.model_validate(task)


@router.get("/{task_id}", response_model=TaskRead)
def read_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> TaskRead:
    with translate_errors():
        task = get_task_uc(db, task_id=task_id)
    return TaskRead.model_validate(task)


@router.put("/{task_id}", response_model=TaskRead)
def update_task(
    task_id: int,
    payload: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    broadcaster: RealtimeBroadcaster = Depends(get_broadcaster),
) -> TaskRead:
    with translate_errors():
        task = update_task_uc(
            db,
            broadcaster,
            task_id=task_id,
            actor=current_user,
            changes=payload.model_dump(exclude_unset=True),
        )
    return TaskRead.model_validate(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    broadcaster: RealtimeBroadcaster = Depends(get_broadcaster),
) -> Response:
    with translate_errors():
        delete_task_uc(db, broadcaster, task_id=task_id, actor=current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{task_id}/feedback", response_model=TaskRead, status_code=status.HTTP_201_CREATED
)
def add_feedback(
    task_id: int,
    payload: TaskFeedbackCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    broadcaster: RealtimeBroadcaster = Depends(get_broadcaster),
) -> TaskRead:
    with translate_errors():
        task = add_feedback_uc(
            db,
            broadcaster,
            task_id=task_id,
            actor=current_user,
            content=payload.content,
            kind=payload.type,
        )
    return TaskRead.model_validate(task)
