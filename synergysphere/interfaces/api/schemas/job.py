"""Schemas for scheduled job runs."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class JobRunRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    job_name: str
    idempotency_key: str
    status: str
    started_at: datetime | None = None
    finished_at: datetime | None = None
    result: dict[str, Any] = Field(default_factory=dict)
    error: str | None = None


class JobRead(BaseModel):
    name: str
    cron: str
    description: str
    last_run: JobRunRead | None = None


__all__ = ["JobRead", "JobRunRead"]
