"""Tests for the connection registry and the realtime broadcaster."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone

import anyio

from synergysphere.domain.entities import Notification
from synergysphere.infrastructure.realtime import (
    ConnectionRegistry,
    RealtimeBroadcaster,
    envelope,
    serialize_notification,
    user_room,
)


class FakeConnection:
    def __init__(self, *, fail: bool = False) -> None:
        self.accepted = False
        self.sent: list = []
        self.fail = fail

    async def accept(self) -> None:
        self.accepted = True

    async def send_json(self, data) -> None:
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(data)


def test_room_emit_reaches_only_members_and_global_reaches_all():
    async def scenario():
        registry = ConnectionRegistry()
        broadcaster = RealtimeBroadcaster(registry)
        member, outsider = FakeConnection(), FakeConnection()
        await registry.connect(member)
        await registry.connect(outsider)
        registry.join(member, user_room(1))

        broadcaster.emit_to_user(1, "notification", {"id": 1})
        broadcaster.emit("task-created", {"id": 9})
        await broadcaster.drain()
        return member, outsider

    member, outsider = asyncio.run(scenario())

    assert member.accepted and outsider.accepted
    assert member.sent == [
        {"type": "notification", "data": {"id": 1}},
        {"type": "task-created", "data": {"id": 9}},
    ]
    assert outsider.sent == [{"type": "task-created", "data": {"id": 9}}]


def test_room_emit_can_exclude_the_sender():
    async def scenario():
        registry = ConnectionRegistry()
        sender, peer = FakeConnection(), FakeConnection()
        for connection in (sender, peer):
            registry.join(connection, "task-5")
        await registry.send_to_room("task-5", envelope("user-typing", {}), exclude=sender)
        return sender, peer

    sender, peer = asyncio.run(scenario())

    assert sender.sent == []
    assert peer.sent == [{"type": "user-typing", "data": {}}]


def test_failed_sends_drop_the_connection_and_empty_rooms():
    async def scenario():
        registry = ConnectionRegistry()
        broken = FakeConnection(fail=True)
        registry.join(broken, "project-1")
        await registry.send_to_room("project-1", envelope("ping", None))
        return registry, broken

    registry, broken = asyncio.run(scenario())

    assert broken not in registry.connections()
    assert "project-1" not in registry.rooms()


def test_leave_and_disconnect_update_memberships():
    registry = ConnectionRegistry()
    connection = FakeConnection()
    registry.join(connection, "task-1")
    registry.join(connection, "task-2")

    registry.leave(connection, "task-1")
    assert registry.rooms_of(connection) == {"task-2"}
    assert registry.members("task-1") == set()

    registry.disconnect(connection)
    assert registry.rooms() == set()
    assert registry.rooms_of(connection) == set()


def test_emit_from_worker_thread_is_delivered_on_the_loop():
    async def scenario():
        registry = ConnectionRegistry()
        broadcaster = RealtimeBroadcaster(registry)
        connection = FakeConnection()
        registry.join(connection, user_room(3))

        await anyio.to_thread.run_sync(broadcaster.emit_to_user, 3, "ping", None)
        await broadcaster.drain()
        return connection

    connection = asyncio.run(scenario())

    assert connection.sent == [{"type": "ping", "data": None}]


def test_emit_without_event_loop_is_dropped():
    registry = ConnectionRegistry()
    broadcaster = RealtimeBroadcaster(registry)

    broadcaster.emit("task-created", {"id": 1})


def test_payload_datetimes_are_serialized():
    created = datetime(2026, 10, 16, 9, 30, tzinfo=timezone.utc)
    message = envelope("task-created", {"due": created, "tags": ("a", "b")})

    assert message == {
        "type": "task-created",
        "data": {"due": "2026-10-16T09:30:00+00:00", "tags": ["a", "b"]},
    }

    notification = Notification(
        id=4,
        recipient_id=1,
        type="task-assigned",
        title="New Task Assigned",
        message="You have been assigned to: Docs",
        action_url="/tasks/2",
        action_text="View Task",
        created_at=created,
    )
    assert serialize_notification(notification) == {
        "id": 4,
        "type": "task-assigned",
        "title": "New Task Assigned",
        "message": "You have been assigned to: Docs",
        "actionUrl": "/tasks/2",
        "actionText": "View Task",
        "priority": "medium",
        "timestamp": "2026-10-16T09:30:00+00:00",
    }
