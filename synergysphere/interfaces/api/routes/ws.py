"""Websocket endpoint for realtime events."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, WebSocket, WebSocketDisconnect

from synergysphere.application.use_cases.notifications import (
    acknowledge_notifications,
    list_unread_notifications,
)
from synergysphere.domain.entities import User
from synergysphere.infrastructure.database import SessionLocal
from synergysphere.infrastructure.realtime import (
    ConnectionRegistry,
    envelope,
    project_room,
    serialize_notification,
    task_room,
    user_room,
)
from synergysphere.interfaces.api.dependencies import resolve_current_user

router = APIRouter(tags=["realtime"])
logger = logging.getLogger(__name__)


def _payload(message: dict[str, Any]) -> dict[str, Any]:
    data = message.get("data")
    if isinstance(data, dict):
        return data
    if data is not None:
        return {"value": data}
    return message


def _identifier(payload: dict[str, Any], key: str) -> str | None:
    value = payload.get(key, payload.get("value"))
    if value is None or value == "":
        return None
    return str(value)


def _authenticate(token: str) -> tuple[User, list[dict[str, Any]]]:
    session = SessionLocal()
    try:
        user = resolve_current_user(token, session)
        if not user.is_active:
            raise HTTPException(status_code=400, detail="Inactive user")
        pending = list_unread_notifications(session, user_id=user.id)
        return user, [serialize_notification(n) for n in pending]
    finally:
        session.close()


def _acknowledge(user_id: int, ids: list[Any]) -> None:
    session = SessionLocal()
    try:
        acknowledge_notifications(session, user_id=user_id, ids=ids)
    finally:
        session.close()


async def _handle_message(
    websocket: WebSocket,
    registry: ConnectionRegistry,
    user: User,
    message: dict[str, Any],
) -> None:
    message_type = message.get("type")
    payload = _payload(message)

    if message_type == "ping":
        await websocket.send_json({"type": "pong"})
    elif message_type in ("join-room", "join-user"):
        requested = _identifier(payload, "userId")
        if requested != str(user.id):
            await websocket.send_json(
                envelope("error", {"message": "Cannot join another user's room"})
            )
            return
        registry.join(websocket, user_room(user.id))
        await websocket.send_json(envelope("joined", {"room": user_room(user.id)}))
    elif message_type in ("join-project", "leave-project"):
        project_id = _identifier(payload, "projectId")
        if project_id is None:
            return
        if message_type == "join-project":
            registry.join(websocket, project_room(project_id))
        else:
            registry.leave(websocket, project_room(project_id))
    elif message_type in ("join-task", "leave-task"):
        task_id = _identifier(payload, "taskId")
        if task_id is None:
            return
        if message_type == "join-task":
            registry.join(websocket, task_room(task_id))
        else:
            registry.leave(websocket, task_room(task_id))
    elif message_type in ("start-typing", "stop-typing"):
        task_id = _identifier(payload, "taskId")
        if task_id is None:
            return
        if message_type == "start-typing":
            event = envelope(
                "user-typing",
                {
                    "userId": user.id,
                    "username": payload.get("username") or user.username,
                    "taskId": payload.get("taskId", task_id),
                },
            )
        else:
            event = envelope(
                "user-stopped-typing",
                {"userId": user.id, "taskId": payload.get("taskId", task_id)},
            )
        await registry.send_to_room(task_room(task_id), event, exclude=websocket)
    elif message_type == "ack":
        ids = payload.get("ids", [])
        if isinstance(ids, list) and ids:
            _acknowledge(user.id, ids)


@router.websocket("/ws")
async def realtime_websocket(websocket: WebSocket) -> None:
    """Authenticate with ``?token=`` and stream events to the user's rooms."""

    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=1008)
        return

    try:
        user, pending = _authenticate(token)
    except HTTPException:
        await websocket.close(code=1008)
        return

    registry: ConnectionRegistry = websocket.app.state.registry
    await registry.connect(websocket)
    registry.join(websocket, user_room(user.id))
    logger.debug("User %s connected to the realtime channel", user.id)
    try:
        await websocket.send_json(envelope("init", pending))
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except ValueError:
                continue
            if isinstance(message, dict):
                await _handle_message(websocket, registry, user, message)
    except WebSocketDisconnect:
        pass
    finally:
        registry.disconnect(websocket)
        logger.debug("User %s disconnected from the realtime channel", user.id)
