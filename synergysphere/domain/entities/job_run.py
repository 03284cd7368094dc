"""Domain entity recording the execution of a scheduled job window."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

JOB_STATUS_RUNNING = "running"
JOB_STATUS_SUCCESS = "success"
JOB_STATUS_FAILED = "failed"
JOB_STATUS_SKIPPED = "skipped"


@dataclass
class JobRun:
    """Claim on an idempotency key such as ``weekly-report:2026-W42``."""

    id: int | None
    job_name: str
    idempotency_key: str
    status: str = JOB_STATUS_RUNNING
    started_at: datetime | None = None
    finished_at: datetime | None = None
    result: dict[str, Any] = field(default_factory=dict)
    error: str | None = None


__all__ = [
    "JOB_STATUS_FAILED",
    "JOB_STATUS_RUNNING",
    "JOB_STATUS_SKIPPED",
    "JOB_STATUS_SUCCESS",
    "JobRun",
]
