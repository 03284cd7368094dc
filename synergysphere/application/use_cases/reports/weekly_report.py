"""Build the weekly activity report and publish it to the team."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from synergysphere.application.use_cases.notifications import notify_weekly_report
from synergysphere.domain.entities import TASK_PRIORITIES, ReportArtifact, WeeklyReport
from synergysphere.infrastructure.realtime import RealtimeBroadcaster
from synergysphere.infrastructure.report_files import write_report_workbook
from synergysphere.infrastructure.repositories import TaskRepository, UserRepository
from synergysphere.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

REPORT_PERIOD = timedelta(days=7)
RECENT_FEEDBACK_LIMIT = 10
UNASSIGNED = "Unassigned"
RECOMMENDATIONS = (
    "Continue the momentum on high-priority tasks",
    "Schedule team retrospectives to discuss process improvements",
    "Review and update task estimates based on actual completion times",
    "Ensure all team members have balanced workloads",
)


def build_weekly_report(session: Session, now: datetime | None = None) -> WeeklyReport:
    """Aggregate the activity of the seven days before ``now``."""

    now = now or now_in_app_timezone()
    since = now - REPORT_PERIOD
    task_repository = TaskRepository(session)
    user_repository = UserRepository(session)

    completed = task_repository.list_completed_since(since)
    users = user_repository.get_map_by_ids(
        [
            user_id
            for task in completed
            for user_id in (task.assignee_id, task.creator_id)
            if user_id
        ]
    )

    tasks_by_user: dict[str, int] = {}
    histogram = {priority: 0 for priority in TASK_PRIORITIES}
    durations = []
    for task in completed:
        owner = users.get(task.assignee_id) or users.get(task.creator_id)
        name = owner.username if owner else UNASSIGNED
        tasks_by_user[name] = tasks_by_user.get(name, 0) + 1
        histogram[task.priority] = histogram.get(task.priority, 0) + 1
        if task.completed_at and task.created_at:
            durations.append((task.completed_at - task.created_at).total_seconds())

    average_days = 0
    if durations:
        average_days = round(sum(durations) / len(durations) / 86400)

    return WeeklyReport(
        generated_at=now,
        period_start=since,
        completed_tasks=len(completed),
        feedback_items=task_repository.count_feedback_since(since),
        active_members=user_repository.count_active(),
        tasks_by_user=tasks_by_user,
        recent_feedback=task_repository.recent_feedback(
            since, limit=RECENT_FEEDBACK_LIMIT
        ),
        average_completion_days=average_days,
        priority_histogram=histogram,
        recommendations=list(RECOMMENDATIONS),
    )


def generate_weekly_report(
    session: Session,
    broadcaster: RealtimeBroadcaster | None,
    now: datetime | None = None,
) -> ReportArtifact:
    """Write a new report artifact and notify every active user.

    Each call produces its own artifact and notification batch; callers
    that need one report per week go through the scheduled job runner.
    """

    report = build_weekly_report(session, now)
    artifact = write_report_workbook(report)
    metadata = {
        "filename": artifact.filename,
        "completedTasks": report.completed_tasks,
        "feedbackItems": report.feedback_items,
    }
    recipients = UserRepository(session).list_active()
    for user in recipients:
        notify_weekly_report(
            session,
            broadcaster,
            recipient_id=user.id,
            report_url=artifact.download_url,
            metadata=metadata,
        )
    if broadcaster is not None:
        broadcaster.emit(
            "weekly-report-ready",
            {"filename": artifact.filename, "downloadUrl": artifact.download_url},
        )
    logger.info(
        "Weekly report %s published to %d users", artifact.filename, len(recipients)
    )
    return artifact


__all__ = ["RECOMMENDATIONS", "build_weekly_report", "generate_weekly_report"]
