"""Realtime delivery helpers for the infrastructure layer."""

from .broadcaster import (
    RealtimeBroadcaster,
    envelope,
    serialize_notification,
    to_jsonable,
)
from .registry import Connection, ConnectionRegistry
from .rooms import project_room, task_room, user_room

__all__ = [
    "Connection",
    "ConnectionRegistry",
    "RealtimeBroadcaster",
    "envelope",
    "project_room",
    "serialize_notification",
    "task_room",
    "to_jsonable",
    "user_room",
]
