"""Use cases for managing tasks."""

from .add_feedback import add_feedback
from .create_task import create_task
from .delete_task import delete_task
from .get_task import get_task, list_tasks
from .update_task import update_task

__all__ = [
    "add_feedback",
    "create_task",
    "delete_task",
    "get_task",
    "list_tasks",
    "update_task",
]
