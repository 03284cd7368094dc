"""Domain entities describing the weekly activity report."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class FeedbackExcerpt:
    task_title: str
    username: str
    content: str
    created_at: datetime


@dataclass
class WeeklyReport:
    """Aggregated view of the last week of activity."""

    generated_at: datetime
    period_start: datetime
    completed_tasks: int
    feedback_items: int
    active_members: int
    tasks_by_user: dict[str, int] = field(default_factory=dict)
    recent_feedback: list[FeedbackExcerpt] = field(default_factory=list)
    average_completion_days: int = 0
    priority_histogram: dict[str, int] = field(default_factory=dict)
    recommendations: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ReportArtifact:
    """File generated for a report and the URL used to download it."""

    filename: str
    path: str
    download_url: str
    size_bytes: int
    created_at: datetime | None = None


__all__ = ["FeedbackExcerpt", "ReportArtifact", "WeeklyReport"]
