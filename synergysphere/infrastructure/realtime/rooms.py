"""Naming helpers for realtime rooms."""

from __future__ import annotations

USER_ROOM_PREFIX = "user-"
PROJECT_ROOM_PREFIX = "project-"
TASK_ROOM_PREFIX = "task-"


def user_room(user_id: int | str) -> str:
    return f"{USER_ROOM_PREFIX}{user_id}"


def project_room(project_id: int | str) -> str:
    return f"{PROJECT_ROOM_PREFIX}{project_id}"


def task_room(task_id: int | str) -> str:
    return f"{TASK_ROOM_PREFIX}{task_id}"


__all__ = [
    "PROJECT_ROOM_PREFIX",
    "TASK_ROOM_PREFIX",
    "USER_ROOM_PREFIX",
    "project_room",
    "task_room",
    "user_room",
]
