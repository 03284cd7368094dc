"""Repository implementations for infrastructure layer."""

from .integration_credential_repository import IntegrationCredentialRepository
from .job_run_repository import JobRunRepository
from .meeting_repository import MeetingRepository
from .notification_repository import NotificationRepository
from .task_repository import TaskRepository
from .user_repository import UserRepository

__all__ = [
    "IntegrationCredentialRepository",
    "JobRunRepository",
    "MeetingRepository",
    "NotificationRepository",
    "TaskRepository",
    "UserRepository",
]
