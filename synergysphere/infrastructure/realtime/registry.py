"""Connection management helpers for realtime websockets."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, DefaultDict, Iterable, Protocol, Set

logger = logging.getLogger(__name__)


class Connection(Protocol):
    """Subset of :class:`fastapi.WebSocket` used by the registry."""

    async def accept(self) -> None: ...

    async def send_json(self, data: Any) -> None: ...


class ConnectionRegistry:
    """Track live connections and the rooms each of them joined.

    Rooms exist only while they have members: the first ``join`` creates a
    room and the last ``leave`` (or ``disconnect``) removes it.
    """

    def __init__(self) -> None:
        self._rooms: DefaultDict[str, Set[Connection]] = defaultdict(set)
        self._memberships: dict[Connection, Set[str]] = {}

    async def connect(self, connection: Connection) -> None:
        """Accept ``connection`` and register it without any room."""

        await connection.accept()
        self.register(connection)

    def register(self, connection: Connection) -> None:
        self._memberships.setdefault(connection, set())

    def disconnect(self, connection: Connection) -> None:
        """Forget ``connection`` and remove it from every room it joined."""

        rooms = self._memberships.pop(connection, set())
        for room in rooms:
            self._discard(room, connection)

    def join(self, connection: Connection, room: str) -> None:
        self.register(connection)
        self._memberships[connection].add(room)
        self._rooms[room].add(connection)

    def leave(self, connection: Connection, room: str) -> None:
        rooms = self._memberships.get(connection)
        if rooms is not None:
            rooms.discard(room)
        self._discard(room, connection)

    def rooms_of(self, connection: Connection) -> set[str]:
        return set(self._memberships.get(connection, set()))

    def members(self, room: str) -> set[Connection]:
        return set(self._rooms.get(room, set()))

    def rooms(self) -> set[str]:
        return set(self._rooms)

    def connections(self) -> set[Connection]:
        return set(self._memberships)

    async def broadcast(
        self, message: dict[str, Any], *, exclude: Connection | None = None
    ) -> None:
        """Send ``message`` to every live connection."""

        await self._send_all(self.connections(), message, exclude)

    async def send_to_room(
        self,
        room: str,
        message: dict[str, Any],
        *,
        exclude: Connection | None = None,
    ) -> None:
        """Send ``message`` to the members of ``room``; empty rooms are a no-op."""

        await self._send_all(self.members(room), message, exclude)

    async def _send_all(
        self,
        connections: Iterable[Connection],
        message: dict[str, Any],
        exclude: Connection | None,
    ) -> None:
        for connection in connections:
            if connection is exclude:
                continue
            try:
                await connection.send_json(message)
            except Exception:
                logger.debug("Dropping realtime connection after failed send", exc_info=True)
                self.disconnect(connection)

    def _discard(self, room: str, connection: Connection) -> None:
        members = self._rooms.get(room)
        if members is None:
            return
        members.discard(connection)
        if not members:
            self._rooms.pop(room, None)


__all__ = ["Connection", "ConnectionRegistry"]
