"""SQLAlchemy model recording scheduled job executions."""

from sqlalchemy import Column, DateTime, Integer, JSON, String, Text

from synergysphere.infrastructure.database import Base
from synergysphere.utils import now_in_app_naive_datetime


class JobRunModel(Base):
    """One row per claimed job invocation window."""

    __tablename__ = "job_run"

    id = Column(Integer, primary_key=True, index=True)
    job_name = Column(String(60), nullable=False, index=True)
    idempotency_key = Column(String(120), nullable=False, unique=True)
    status = Column(String(20), nullable=False, default="running")
    started_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)
    finished_at = Column(DateTime, nullable=True)
    result = Column(JSON, nullable=False, default=dict)
    error = Column(Text, nullable=True)


__all__ = ["JobRunModel"]
