"""Endpoints for reading and managing the user's notifications."""

from __future__ import annotations

import math

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from synergysphere.application.use_cases.notifications import (
    clear_read_notifications,
    delete_notification as delete_notification_uc,
    get_notification,
    get_unread_count,
    list_notifications as list_notifications_uc,
    mark_all_notifications_read,
    mark_notification_read,
    mark_notification_unread,
    notification_stats,
    notification_types_for_user,
)
from synergysphere.domain.entities import User
from synergysphere.infrastructure.database import get_db
from synergysphere.interfaces.api.dependencies import get_current_active_user
from synergysphere.interfaces.api.errors import translate_errors
from synergysphere.interfaces.api.schemas import (
    CountResponse,
    NotificationList,
    NotificationRead,
    NotificationStats,
    Pagination,
    UnreadCount,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("/", response_model=NotificationList)
def list_notifications(
    read: bool | None = None,
    type: str | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationList:
    """Return a page of unexpired notifications, newest first."""

    with translate_errors():
        notifications, total = list_notifications_uc(
            db,
            user_id=current_user.id,
            read=read,
            type=type,
            page=page,
            limit=limit,
        )
    return NotificationList(
        notifications=[NotificationRead.model_validate(n) for n in notifications],
        pagination=Pagination(
            page=page, limit=limit, total=total, pages=math.ceil(total / limit)
        ),
        unread_count=get_unread_count(db, user_id=current_user.id),
    )


@router.get("/unread-count", response_model=UnreadCount)
def unread_count(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> UnreadCount:
    return UnreadCount(unread_count=get_unread_count(db, user_id=current_user.id))


@router.get("/types", response_model=list[str])
def list_types(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[str]:
    return notification_types_for_user(db, user_id=current_user.id)


@router.get("/stats", response_model=NotificationStats)
def stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationStats:
    return NotificationStats(**notification_stats(db, user_id=current_user.id))


@router.patch("/read-all", response_model=CountResponse)
def read_all(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> CountResponse:
    count = mark_all_notifications_read(db, user_id=current_user.id)
    return CountResponse(message="All notifications marked as read", count=count)


@router.delete("/clear-read", response_model=CountResponse)
def clear_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> CountResponse:
    count = clear_read_notifications(db, user_id=current_user.id)
    return CountResponse(message="Read notifications cleared", count=count)


@router.get("/{notification_id}", response_model=NotificationRead)
def read_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationRead:
    with translate_errors():
        notification = get_notification(
            db, notification_id=notification_id, user_id=current_user.id
        )
    return NotificationRead.model_validate(notification)


@router.patch("/{notification_id}/read", response_model=NotificationRead)
def mark_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationRead:
    with translate_errors():
        notification = mark_notification_read(
            db, notification_id=notification_id, user_id=current_user.id
        )
    return NotificationRead.model_validate(notification)


@router.patch("/{notification_id}/unread", response_model=NotificationRead)
def mark_unread(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationRead:
    with translate_errors():
        notification = mark_notification_unread(
            db, notification_id=notification_id, user_id=current_user.id
        )
    return NotificationRead.model_validate(notification)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> Response:
    with translate_errors():
        delete_notification_uc(
            db, notification_id=notification_id, user_id=current_user.id
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
