"""Use cases for managing meetings."""

from .meetings import (
    create_meeting,
    delete_meeting,
    get_meeting,
    join_meeting,
    list_meetings,
    respond_to_meeting,
    schedule_standup,
    update_meeting,
)

__all__ = [
    "create_meeting",
    "delete_meeting",
    "get_meeting",
    "join_meeting",
    "list_meetings",
    "respond_to_meeting",
    "schedule_standup",
    "update_meeting",
]
