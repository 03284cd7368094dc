"""Domain entities exposed by the application."""

from .integration_credential import (
    PROVIDERS,
    PROVIDER_GITHUB,
    PROVIDER_GOOGLE,
    IntegrationCredential,
)
from .job_run import (
    JOB_STATUS_FAILED,
    JOB_STATUS_RUNNING,
    JOB_STATUS_SKIPPED,
    JOB_STATUS_SUCCESS,
    JobRun,
)
from .meeting import (
    ATTENDEE_ACCEPTED,
    ATTENDEE_ATTENDED,
    ATTENDEE_DECLINED,
    ATTENDEE_INVITED,
    ATTENDEE_STATUSES,
    MEETING_KINDS,
    MEETING_STATUSES,
    MEETING_STATUS_CANCELLED,
    MEETING_STATUS_SCHEDULED,
    Meeting,
    MeetingAttendee,
)
from .notification import (
    MESSAGE_MAX_LENGTH,
    NOTIFICATION_PRIORITIES,
    NOTIFICATION_TYPES,
    NOTIFICATION_TYPE_FEEDBACK_RECEIVED,
    NOTIFICATION_TYPE_GITHUB_ISSUE_SYNCED,
    NOTIFICATION_TYPE_MEETING_INVITE,
    NOTIFICATION_TYPE_MEETING_REMINDER,
    NOTIFICATION_TYPE_SYSTEM_ALERT,
    NOTIFICATION_TYPE_TASK_ASSIGNED,
    NOTIFICATION_TYPE_TASK_COMPLETED,
    NOTIFICATION_TYPE_TASK_UPDATED,
    NOTIFICATION_TYPE_WEEKLY_REPORT_READY,
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
    PRIORITY_URGENT,
    TITLE_MAX_LENGTH,
    Notification,
)
from .report import FeedbackExcerpt, ReportArtifact, WeeklyReport
from .task import (
    ACTIVITY_ASSIGNED,
    ACTIVITY_COMMENTED,
    ACTIVITY_CREATED,
    ACTIVITY_STATUS_CHANGED,
    ACTIVITY_UPDATED,
    FEEDBACK_KINDS,
    TASK_PRIORITIES,
    TASK_STATUSES,
    TASK_STATUS_DONE,
    TASK_STATUS_IN_PROGRESS,
    TASK_STATUS_TODO,
    Task,
    TaskActivity,
    TaskFeedback,
)
from .user import ROLE_ADMIN, ROLE_USER, User

__all__ = [
    "ACTIVITY_ASSIGNED",
    "ACTIVITY_COMMENTED",
    "ACTIVITY_CREATED",
    "ACTIVITY_STATUS_CHANGED",
    "ACTIVITY_UPDATED",
    "ATTENDEE_ACCEPTED",
    "ATTENDEE_ATTENDED",
    "ATTENDEE_DECLINED",
    "ATTENDEE_INVITED",
    "ATTENDEE_STATUSES",
    "FEEDBACK_KINDS",
    "FeedbackExcerpt",
    "IntegrationCredential",
    "JOB_STATUS_FAILED",
    "JOB_STATUS_RUNNING",
    "JOB_STATUS_SKIPPED",
    "JOB_STATUS_SUCCESS",
    "JobRun",
    "MEETING_KINDS",
    "MEETING_STATUSES",
    "MEETING_STATUS_CANCELLED",
    "MEETING_STATUS_SCHEDULED",
    "MESSAGE_MAX_LENGTH",
    "Meeting",
    "MeetingAttendee",
    "NOTIFICATION_PRIORITIES",
    "NOTIFICATION_TYPES",
    "NOTIFICATION_TYPE_FEEDBACK_RECEIVED",
    "NOTIFICATION_TYPE_GITHUB_ISSUE_SYNCED",
    "NOTIFICATION_TYPE_MEETING_INVITE",
    "NOTIFICATION_TYPE_MEETING_REMINDER",
    "NOTIFICATION_TYPE_SYSTEM_ALERT",
    "NOTIFICATION_TYPE_TASK_ASSIGNED",
    "NOTIFICATION_TYPE_TASK_COMPLETED",
    "NOTIFICATION_TYPE_TASK_UPDATED",
    "NOTIFICATION_TYPE_WEEKLY_REPORT_READY",
    "Notification",
    "PRIORITY_HIGH",
    "PRIORITY_LOW",
    "PRIORITY_MEDIUM",
    "PRIORITY_URGENT",
    "PROVIDERS",
    "PROVIDER_GITHUB",
    "PROVIDER_GOOGLE",
    "ROLE_ADMIN",
    "ROLE_USER",
    "ReportArtifact",
    "TASK_PRIORITIES",
    "TASK_STATUSES",
    "TASK_STATUS_DONE",
    "TASK_STATUS_IN_PROGRESS",
    "TASK_STATUS_TODO",
    "TITLE_MAX_LENGTH",
    "Task",
    "TaskActivity",
    "TaskFeedback",
    "User",
    "WeeklyReport",
]
