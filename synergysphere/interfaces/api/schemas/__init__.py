from .auth import Token
from .integration import (
    ConnectedProvider,
    CredentialCreate,
    GitHubImportResult,
    GitHubIssueImport,
)
from .job import JobRead, JobRunRead
from .meeting import (
    MeetingAttendeeRead,
    MeetingCreate,
    MeetingList,
    MeetingRead,
    MeetingRespond,
    MeetingUpdate,
    StandupCreate,
)
from .notification import (
    CountResponse,
    NotificationList,
    NotificationRead,
    NotificationStats,
    UnreadCount,
)
from .report import ReportGenerated, ReportRead
from .task import (
    Pagination,
    TaskActivityRead,
    TaskCreate,
    TaskFeedbackCreate,
    TaskFeedbackRead,
    TaskList,
    TaskRead,
    TaskUpdate,
)
from .user import UserCreate, UserRead

__all__ = [
    "ConnectedProvider",
    "CountResponse",
    "CredentialCreate",
    "GitHubImportResult",
    "GitHubIssueImport",
    "JobRead",
    "JobRunRead",
    "MeetingAttendeeRead",
    "MeetingCreate",
    "MeetingList",
    "MeetingRead",
    "MeetingRespond",
    "MeetingUpdate",
    "NotificationList",
    "NotificationRead",
    "NotificationStats",
    "Pagination",
    "ReportGenerated",
    "ReportRead",
    "StandupCreate",
    "TaskActivityRead",
    "TaskCreate",
    "TaskFeedbackCreate",
    "TaskFeedbackRead",
    "TaskList",
    "TaskRead",
    "TaskUpdate",
    "Token",
    "UnreadCount",
    "UserCreate",
    "UserRead",
]
