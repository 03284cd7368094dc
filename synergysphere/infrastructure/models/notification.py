"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, JSON, String
from sqlalchemy.orm import relationship

from synergysphere.infrastructure.database import Base
from synergysphere.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notification"

    id = Column(Integer, primary_key=True, index=True)
    recipient_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    sender_id = Column(Integer, ForeignKey("user.id"), nullable=True)
    type = Column(String(40), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    message = Column(String(1000), nullable=False)
    related_task_id = Column(Integer, nullable=True)
    related_meeting_id = Column(Integer, nullable=True)
    action_url = Column(String(500), nullable=True)
    action_text = Column(String(100), nullable=True)
    # ``metadata`` is reserved on declarative classes.
    payload = Column("metadata", JSON, nullable=False, default=dict)
    read = Column(Boolean, nullable=False, default=False, index=True)
    read_at = Column(DateTime, nullable=True)
    priority = Column(String(20), nullable=False, default="medium")
    expires_at = Column(DateTime, nullable=False, index=True)
    created_at = Column(
        DateTime, nullable=False, default=now_in_app_naive_datetime, index=True
    )

    recipient = relationship("UserModel", foreign_keys=[recipient_id], lazy="joined")


__all__ = ["NotificationModel"]
