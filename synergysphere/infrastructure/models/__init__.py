"""SQLAlchemy models for the application."""

from .integration_credential import IntegrationCredentialModel
from .job_run import JobRunModel
from .meeting import MeetingAttendeeModel, MeetingModel
from .notification import NotificationModel
from .task import TaskActivityModel, TaskFeedbackModel, TaskModel
from .user import UserModel

__all__ = [
    "IntegrationCredentialModel",
    "JobRunModel",
    "MeetingAttendeeModel",
    "MeetingModel",
    "NotificationModel",
    "TaskActivityModel",
    "TaskFeedbackModel",
    "TaskModel",
    "UserModel",
]
