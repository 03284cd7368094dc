"""SQLAlchemy models for tasks and their feedback entries."""

from sqlalchemy import (
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    JSON,
    String,
    Text,
)
from sqlalchemy.orm import relationship

from synergysphere.infrastructure.database import Base
from synergysphere.utils import now_in_app_naive_datetime


class TaskModel(Base):
    """Database representation of a kanban task."""

    __tablename__ = "task"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="todo", index=True)
    priority = Column(String(20), nullable=False, default="medium")
    creator_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    assignee_id = Column(Integer, ForeignKey("user.id"), nullable=True, index=True)
    due_date = Column(DateTime, nullable=True)
    completed_at = Column(DateTime, nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    estimated_hours = Column(Float, nullable=True)
    actual_hours = Column(Float, nullable=True)
    github_issue_id = Column(Integer, nullable=True, index=True)
    github_issue_number = Column(Integer, nullable=True)
    github_repository = Column(String(200), nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime, nullable=True, onupdate=now_in_app_naive_datetime)

    feedback = relationship(
        "TaskFeedbackModel",
        back_populates="task",
        cascade="all, delete-orphan",
        order_by="TaskFeedbackModel.created_at",
        lazy="selectin",
    )
    activity = relationship(
        "TaskActivityModel",
        back_populates="task",
        cascade="all, delete-orphan",
        order_by="TaskActivityModel.id",
        lazy="selectin",
    )


class TaskFeedbackModel(Base):
    """Feedback entry attached to a task."""

    __tablename__ = "task_feedback"

    id = Column(Integer, primary_key=True, index=True)
    task_id = Column(
        Integer, ForeignKey("task.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False)
    content = Column(String(1000), nullable=False)
    kind = Column(String(20), nullable=False, default="comment")
    created_at = Column(
        DateTime, nullable=False, default=now_in_app_naive_datetime, index=True
    )

    task = relationship("TaskModel", back_populates="feedback")


class TaskActivityModel(Base):
    """Activity log entry attached to a task."""

    __tablename__ = "task_activity"

    id = Column(Integer, primary_key=True, index=True)
    task_id = Column(
        Integer, ForeignKey("task.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False)
    action = Column(String(20), nullable=False)
    details = Column(String(500), nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)

    task = relationship("TaskModel", back_populates="activity")


__all__ = ["TaskActivityModel", "TaskFeedbackModel", "TaskModel"]
