"""Persistence layer for tasks, their feedback and their activity log."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from synergysphere.domain.entities import (
    TASK_STATUS_DONE,
    FeedbackExcerpt,
    Task,
    TaskActivity,
    TaskFeedback,
)
from synergysphere.infrastructure.models import (
    TaskActivityModel,
    TaskFeedbackModel,
    TaskModel,
    UserModel,
)
from synergysphere.utils import ensure_app_naive_datetime, ensure_app_timezone

_SORTABLE_COLUMNS = {
    "createdAt": TaskModel.created_at,
    "created_at": TaskModel.created_at,
    "updatedAt": TaskModel.updated_at,
    "updated_at": TaskModel.updated_at,
    "dueDate": TaskModel.due_date,
    "due_date": TaskModel.due_date,
    "priority": TaskModel.priority,
    "title": TaskModel.title,
    "status": TaskModel.status,
}


class TaskRepository:
    """Provide CRUD operations for :class:`Task` entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(
        self,
        *,
        status: str | None = None,
        priority: str | None = None,
        assignee_id: int | None = None,
        search: str | None = None,
        sort_by: str = "createdAt",
        descending: bool = True,
        skip: int = 0,
        limit: int = 50,
    ) -> tuple[Sequence[Task], int]:
        query = self.session.query(TaskModel)
        if status:
            query = query.filter(TaskModel.status == status)
        if priority:
            query = query.filter(TaskModel.priority == priority)
        if assignee_id is not None:
            query = query.filter(TaskModel.assignee_id == assignee_id)
        if search:
            pattern = f"%{search.lower()}%"
            query = query.filter(
                or_(
                    func.lower(TaskModel.title).like(pattern),
                    func.lower(TaskModel.description).like(pattern),
                )
            )
        total = query.count()

        column = _SORTABLE_COLUMNS.get(sort_by, TaskModel.created_at)
        ordering = column.desc() if descending else column.asc()
        query = query.order_by(ordering, TaskModel.id.desc()).offset(skip).limit(limit)
        return [self._to_entity(model) for model in query.all()], total

    def get(self, task_id: int) -> Task | None:
        model = self.session.get(TaskModel, task_id)
        return self._to_entity(model) if model else None

    def list_by_github_issue(
        self, issue_id: int, *, repository: str | None = None
    ) -> Sequence[Task]:
        query = self.session.query(TaskModel).filter(TaskModel.github_issue_id == issue_id)
        if repository is not None:
            query = query.filter(TaskModel.github_repository == repository)
        return [self._to_entity(model) for model in query.all()]

    def list_overdue(self, now: datetime) -> Sequence[Task]:
        query = (
            self.session.query(TaskModel)
            .filter(TaskModel.due_date.is_not(None))
            .filter(TaskModel.due_date < ensure_app_naive_datetime(now))
            .filter(TaskModel.status != TASK_STATUS_DONE)
            .order_by(TaskModel.due_date, TaskModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def list_completed_since(self, since: datetime) -> Sequence[Task]:
        query = (
            self.session.query(TaskModel)
            .filter(TaskModel.status == TASK_STATUS_DONE)
            .filter(TaskModel.completed_at >= ensure_app_naive_datetime(since))
            .order_by(TaskModel.completed_at.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def count_feedback_since(self, since: datetime) -> int:
        return (
            self.session.query(func.count(TaskFeedbackModel.id))
            .filter(TaskFeedbackModel.created_at >= ensure_app_naive_datetime(since))
            .scalar()
            or 0
        )

    def recent_feedback(self, since: datetime, *, limit: int = 10) -> list[FeedbackExcerpt]:
        rows = (
            self.session.query(TaskFeedbackModel, TaskModel.title, UserModel.username)
            .join(TaskModel, TaskFeedbackModel.task_id == TaskModel.id)
            .join(UserModel, TaskFeedbackModel.user_id == UserModel.id)
            .filter(TaskFeedbackModel.created_at >= ensure_app_naive_datetime(since))
            .order_by(TaskFeedbackModel.created_at.desc(), TaskFeedbackModel.id.desc())
            .limit(limit)
            .all()
        )
        return [
            FeedbackExcerpt(
                task_title=title,
                username=username,
                content=feedback.content,
                created_at=ensure_app_timezone(feedback.created_at),
            )
            for feedback, title, username in rows
        ]

    def create(self, task: Task) -> Task:
        model = TaskModel()
        self._apply_entity_to_model(model, task)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, task: Task) -> Task:
        model = self.session.get(TaskModel, task.id)
        if model is None:
            msg = f"Task with id {task.id} not found"
            raise LookupError(msg)
        self._apply_entity_to_model(model, task)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, task_id: int) -> None:
        model = self.session.get(TaskModel, task_id)
        if model is None:
            msg = f"Task with id {task_id} not found"
            raise LookupError(msg)
        self.session.delete(model)
        self.session.commit()

    def add_feedback(self, feedback: TaskFeedback) -> TaskFeedback:
        model = TaskFeedbackModel(
            task_id=feedback.task_id,
            user_id=feedback.user_id,
            content=feedback.content,
            kind=feedback.kind,
        )
        if feedback.created_at is not None:
            model.created_at = ensure_app_naive_datetime(feedback.created_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._feedback_to_entity(model)

    @staticmethod
    def _apply_entity_to_model(model: TaskModel, task: Task) -> None:
        model.title = task.title
        model.description = task.description
        model.status = task.status
        model.priority = task.priority
        model.creator_id = task.creator_id
        model.assignee_id = task.assignee_id
        model.due_date = ensure_app_naive_datetime(task.due_date)
        model.completed_at = ensure_app_naive_datetime(task.completed_at)
        model.tags = list(task.tags or [])
        model.estimated_hours = task.estimated_hours
        model.actual_hours = task.actual_hours
        model.github_issue_id = task.github_issue_id
        model.github_issue_number = task.github_issue_number
        model.github_repository = task.github_repository
        for entry in task.activity:
            if entry.id is not None:
                continue
            activity = TaskActivityModel(
                user_id=entry.user_id, action=entry.action, details=entry.details
            )
            if entry.created_at is not None:
                activity.created_at = ensure_app_naive_datetime(entry.created_at)
            model.activity.append(activity)

    @staticmethod
    def _feedback_to_entity(model: TaskFeedbackModel) -> TaskFeedback:
        return TaskFeedback(
            id=model.id,
            task_id=model.task_id,
            user_id=model.user_id,
            content=model.content,
            kind=model.kind,
            created_at=ensure_app_timezone(model.created_at),
        )

    @staticmethod
    def _activity_to_entity(model: TaskActivityModel) -> TaskActivity:
        return TaskActivity(
            id=model.id,
            task_id=model.task_id,
            user_id=model.user_id,
            action=model.action,
            details=model.details,
            created_at=ensure_app_timezone(model.created_at),
        )

    @classmethod
    def _to_entity(cls, model: TaskModel) -> Task:
        return Task(
            id=model.id,
            title=model.title,
            description=model.description,
            status=model.status,
            priority=model.priority,
            creator_id=model.creator_id,
            assignee_id=model.assignee_id,
            due_date=ensure_app_timezone(model.due_date),
            completed_at=ensure_app_timezone(model.completed_at),
            tags=list(model.tags or []),
            estimated_hours=model.estimated_hours,
            actual_hours=model.actual_hours,
            github_issue_id=model.github_issue_id,
            github_issue_number=model.github_issue_number,
            github_repository=model.github_repository,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
            feedback=[cls._feedback_to_entity(item) for item in model.feedback],
            activity=[cls._activity_to_entity(item) for item in model.activity],
        )


__all__ = ["TaskRepository"]
