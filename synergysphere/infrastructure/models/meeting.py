"""SQLAlchemy models for meetings and attendees."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from synergysphere.infrastructure.database import Base
from synergysphere.utils import now_in_app_naive_datetime


class MeetingModel(Base):
    """Database representation of a scheduled meeting."""

    __tablename__ = "meeting"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(String(1000), nullable=True)
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=False)
    organizer_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    kind = Column(String(20), nullable=False, default="general")
    location = Column(String(200), nullable=True)
    status = Column(String(20), nullable=False, default="scheduled", index=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime, nullable=True, onupdate=now_in_app_naive_datetime)

    attendees = relationship(
        "MeetingAttendeeModel",
        back_populates="meeting",
        cascade="all, delete-orphan",
        order_by="MeetingAttendeeModel.id",
        lazy="selectin",
    )


class MeetingAttendeeModel(Base):
    """Invitation row linking a user to a meeting."""

    __tablename__ = "meeting_attendee"
    __table_args__ = (UniqueConstraint("meeting_id", "user_id"),)

    id = Column(Integer, primary_key=True, index=True)
    meeting_id = Column(
        Integer, ForeignKey("meeting.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="invited")
    responded_at = Column(DateTime, nullable=True)
    joined_at = Column(DateTime, nullable=True)

    meeting = relationship("MeetingModel", back_populates="attendees")


__all__ = ["MeetingAttendeeModel", "MeetingModel"]
