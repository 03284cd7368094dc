"""Use case for deleting tasks."""

from sqlalchemy.orm import Session

from synergysphere.domain.entities import User
from synergysphere.infrastructure.realtime import RealtimeBroadcaster
from synergysphere.infrastructure.repositories import TaskRepository

from .validators import get_task_or_raise


def delete_task(
    session: Session,
    broadcaster: RealtimeBroadcaster | None,
    *,
    task_id: int,
    actor: User,
) -> None:
    """Delete a task. Only its creator or an administrator may do so."""

    task = get_task_or_raise(session, task_id)
    if task.creator_id != actor.id and not actor.is_admin():
        raise PermissionError("Not authorized to delete this task")

    TaskRepository(session).delete(task_id)
    if broadcaster is not None:
        broadcaster.emit("task-deleted", {"id": task_id})
