"""Scheduled jobs, their registry and the idempotent runner."""

from .registry import JobDefinition, get_job, register_job, registered_jobs
from .runner import JobRunner
from .scheduler import create_scheduler
from .scheduled_jobs import (
    check_overdue_tasks,
    cleanup_notifications,
    send_meeting_reminders,
    send_weekly_report,
)
from .windows import daily_window, five_minute_window, hourly_window, iso_week_window

__all__ = [
    "JobDefinition",
    "JobRunner",
    "check_overdue_tasks",
    "create_scheduler",
    "cleanup_notifications",
    "daily_window",
    "five_minute_window",
    "get_job",
    "hourly_window",
    "iso_week_window",
    "register_job",
    "registered_jobs",
    "send_meeting_reminders",
    "send_weekly_report",
]
