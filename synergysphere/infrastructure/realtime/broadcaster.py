"""Fire-and-forget delivery of realtime events to websocket subscribers."""

from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime
from functools import partial
from typing import Any, Awaitable, Callable

from anyio import from_thread

from synergysphere.domain.entities import Notification

from .registry import Connection, ConnectionRegistry
from .rooms import user_room

logger = logging.getLogger(__name__)


class RealtimeBroadcaster:
    """Serialize events and schedule their delivery through a registry.

    Every ``emit*`` method returns immediately. Delivery happens on the event
    loop that owns the registry: directly when called from that loop, or via
    :mod:`anyio.from_thread` when called from a worker thread (sync endpoints
    and scheduled job bodies). Without a reachable loop the event is dropped;
    persisted notifications remain available through the REST API.
    """

    def __init__(self, registry: ConnectionRegistry) -> None:
        self.registry = registry
        self._pending: set[asyncio.Task] = set()

    def emit(self, event: str, data: Any = None) -> None:
        """Broadcast ``event`` to every connected client."""

        self._schedule(self.registry.broadcast, envelope(event, data))

    def emit_to_room(
        self,
        room: str,
        event: str,
        data: Any = None,
        *,
        exclude: Connection | None = None,
    ) -> None:
        self._schedule(
            partial(self.registry.send_to_room, exclude=exclude),
            room,
            envelope(event, data),
        )

    def emit_to_user(self, user_id: int, event: str, data: Any = None) -> None:
        self.emit_to_room(user_room(user_id), event, data)

    def push_notification(self, notification: Notification) -> None:
        """Push ``notification`` to the room of its recipient."""

        self.emit_to_user(
            notification.recipient_id,
            "notification",
            serialize_notification(notification),
        )

    async def drain(self) -> None:
        """Wait until every delivery scheduled so far has completed."""

        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    def _schedule(self, func: Callable[..., Awaitable[None]], *args: Any) -> None:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            try:
                from_thread.run_sync(self._spawn, func, *args)
            except RuntimeError:
                logger.debug("No event loop available; realtime event dropped")
        else:
            self._spawn(func, *args)

    def _spawn(self, func: Callable[..., Awaitable[None]], *args: Any) -> None:
        task = asyncio.get_running_loop().create_task(func(*args))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)


def envelope(event: str, data: Any) -> dict[str, Any]:
    """Return the wire message for ``event``."""

    return {"type": event, "data": to_jsonable(data)}


def to_jsonable(value: Any) -> Any:
    """Return a copy of ``value`` with datetimes rendered as ISO strings."""

    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [to_jsonable(item) for item in value]
    return value


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the push representation of ``notification``."""

    return {
        "id": notification.id,
        "type": notification.type,
        "title": notification.title,
        "message": notification.message,
        "actionUrl": notification.action_url,
        "actionText": notification.action_text,
        "priority": notification.priority,
        "timestamp": (
            notification.created_at.isoformat() if notification.created_at else None
        ),
    }


__all__ = [
    "RealtimeBroadcaster",
    "envelope",
    "serialize_notification",
    "to_jsonable",
]
