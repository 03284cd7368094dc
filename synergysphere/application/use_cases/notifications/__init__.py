"""Public helpers for creating and managing notifications."""

from .factory import (
    MEETING_CANCELLED,
    create_notification,
    notify_github_event,
    notify_meeting_event,
    notify_system,
    notify_task_event,
    notify_task_moved,
    notify_weekly_report,
    send_bulk_notifications,
)
from .manage import (
    acknowledge_notifications,
    cleanup_expired_notifications,
    clear_read_notifications,
    delete_notification,
    get_notification,
    get_unread_count,
    list_notifications,
    list_unread_notifications,
    mark_all_notifications_read,
    mark_notification_read,
    mark_notification_unread,
    notification_stats,
    notification_types_for_user,
)

__all__ = [
    "MEETING_CANCELLED",
    "acknowledge_notifications",
    "cleanup_expired_notifications",
    "clear_read_notifications",
    "create_notification",
    "delete_notification",
    "get_notification",
    "get_unread_count",
    "list_notifications",
    "list_unread_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
    "mark_notification_unread",
    "notification_stats",
    "notification_types_for_user",
    "notify_github_event",
    "notify_meeting_event",
    "notify_system",
    "notify_task_event",
    "notify_task_moved",
    "notify_weekly_report",
    "send_bulk_notifications",
]
