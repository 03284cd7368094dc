"""Concrete job bodies that run on a schedule.

Jobs:
    - weekly-report: build the weekly report and tell every active user
    - meeting-reminders: remind attendees of meetings starting soon
    - overdue-sweep: notify the people involved in overdue tasks
    - notification-cleanup: delete expired notifications

Called directly, each body performs its side effects every time. The
``JobRunner`` is the layer that guarantees one run per window.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any

from sqlalchemy.orm import Session

from synergysphere.application.use_cases.notifications import (
    cleanup_expired_notifications,
    notify_meeting_event,
    notify_task_event,
)
from synergysphere.application.use_cases.reports import generate_weekly_report
from synergysphere.domain.entities import (
    MEETING_STATUS_SCHEDULED,
    NOTIFICATION_TYPE_MEETING_REMINDER,
    NOTIFICATION_TYPE_TASK_UPDATED,
)
from synergysphere.infrastructure.realtime import RealtimeBroadcaster
from synergysphere.infrastructure.repositories import MeetingRepository, TaskRepository
from synergysphere.utils import now_in_app_timezone

from .registry import register_job
from .windows import daily_window, five_minute_window, hourly_window, iso_week_window

logger = logging.getLogger(__name__)

REMINDER_LEAD_MIN = timedelta(minutes=15)
REMINDER_LEAD_MAX = timedelta(minutes=30)


@register_job("weekly-report", cron="0 17 * * 5", window=iso_week_window)
def send_weekly_report(
    session: Session,
    broadcaster: RealtimeBroadcaster | None,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Generate the weekly report and notify every active user."""

    artifact = generate_weekly_report(session, broadcaster, now)
    return {"filename": artifact.filename, "downloadUrl": artifact.download_url}


@register_job("meeting-reminders", cron="*/5 * * * *", window=five_minute_window)
def send_meeting_reminders(
    session: Session,
    broadcaster: RealtimeBroadcaster | None,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Remind attendees of meetings starting in 15 to 30 minutes."""

    now = now or now_in_app_timezone()
    meetings = MeetingRepository(session).list_starting_between(
        now + REMINDER_LEAD_MIN,
        now + REMINDER_LEAD_MAX,
        status=MEETING_STATUS_SCHEDULED,
    )
    reminders = 0
    for meeting in meetings:
        for user_id in meeting.reminder_recipient_ids():
            notify_meeting_event(
                session,
                broadcaster,
                NOTIFICATION_TYPE_MEETING_REMINDER,
                meeting,
                user_id,
            )
            if broadcaster is not None:
                broadcaster.emit_to_user(
                    user_id,
                    "meeting-reminder",
                    {
                        "meetingId": meeting.id,
                        "title": meeting.title,
                        "startTime": meeting.start_time,
                    },
                )
            reminders += 1
        logger.info("Sent reminders for meeting %s", meeting.id)
    return {"meetings": len(meetings), "reminders": reminders}


@register_job("overdue-sweep", cron="0 * * * *", window=hourly_window)
def check_overdue_tasks(
    session: Session,
    broadcaster: RealtimeBroadcaster | None,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Notify the assignee of every overdue task, and the creator when different.

    Unassigned tasks produce no notifications.
    """

    now = now or now_in_app_timezone()
    tasks = TaskRepository(session).list_overdue(now)
    created = 0
    for task in tasks:
        if not task.assignee_id:
            continue
        recipients = [task.assignee_id]
        if task.creator_id != task.assignee_id:
            recipients.append(task.creator_id)
        for recipient_id in recipients:
            notify_task_event(
                session,
                broadcaster,
                NOTIFICATION_TYPE_TASK_UPDATED,
                task,
                recipient_id,
                metadata={"reason": "overdue"},
            )
            created += 1
    logger.info("Checked %d overdue tasks", len(tasks))
    return {"overdueTasks": len(tasks), "notifications": created}


@register_job("notification-cleanup", cron="0 2 * * *", window=daily_window)
def cleanup_notifications(
    session: Session,
    broadcaster: RealtimeBroadcaster | None,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Delete notifications whose expiry date has passed."""

    return {"deleted": cleanup_expired_notifications(session, now)}


__all__ = [
    "check_overdue_tasks",
    "cleanup_notifications",
    "send_meeting_reminders",
    "send_weekly_report",
]
