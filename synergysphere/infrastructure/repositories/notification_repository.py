"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timedelta
from typing import Any, Iterable

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from synergysphere.domain.entities import Notification
from synergysphere.infrastructure.models import NotificationModel
from synergysphere.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: int) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def list_for_user(
        self,
        user_id: int,
        *,
        read: bool | None = None,
        type: str | None = None,
        skip: int = 0,
        limit: int | None = 50,
        now: datetime | None = None,
    ) -> tuple[Sequence[Notification], int]:
        """Return a page of unexpired notifications and the total match count."""

        query = self._unexpired(user_id, now)
        if read is not None:
            query = query.filter(NotificationModel.read.is_(read))
        if type:
            query = query.filter(NotificationModel.type == type)
        total = query.count()
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        ).offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()], total

    def list_unread_for_user(
        self, user_id: int, *, limit: int | None = 50, now: datetime | None = None
    ) -> Sequence[Notification]:
        query = (
            self._unexpired(user_id, now)
            .filter(NotificationModel.read.is_(False))
            .order_by(
                NotificationModel.created_at.desc(), NotificationModel.id.desc()
            )
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count_unread(self, user_id: int, *, now: datetime | None = None) -> int:
        return (
            self._unexpired(user_id, now)
            .filter(NotificationModel.read.is_(False))
            .count()
        )

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification, include_creation_fields=True)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def set_read_state(self, notification_id: int, *, read: bool) -> Notification:
        """Mark a single notification read or unread keeping ``read_at`` in sync."""

        model = self.session.get(NotificationModel, notification_id)
        if model is None:
            msg = f"Notification with id {notification_id} not found"
            raise LookupError(msg)
        model.read = read
        model.read_at = (
            ensure_app_naive_datetime(now_in_app_timezone()) if read else None
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_as_read(self, notification_ids: Iterable[int], *, user_id: int) -> int:
        ids = [
            int(notification_id)
            for notification_id in notification_ids
            if isinstance(notification_id, int) and not isinstance(notification_id, bool)
        ]
        if not ids:
            return 0
        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.id.in_(ids),
                NotificationModel.recipient_id == user_id,
                NotificationModel.read.is_(False),
            )
            .update(self._read_values(), synchronize_session=False)
        )
        self.session.commit()
        return updated

    def mark_all_as_read(self, user_id: int) -> int:
        updated = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.recipient_id == user_id,
                NotificationModel.read.is_(False),
            )
            .update(self._read_values(), synchronize_session=False)
        )
        self.session.commit()
        return updated

    def delete(self, notification_id: int) -> None:
        model = self.session.get(NotificationModel, notification_id)
        if model is None:
            msg = f"Notification with id {notification_id} not found"
            raise LookupError(msg)
        self.session.delete(model)
        self.session.commit()

    def delete_read(self, user_id: int) -> int:
        deleted = (
            self.session.query(NotificationModel)
            .filter(
                NotificationModel.recipient_id == user_id,
                NotificationModel.read.is_(True),
            )
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return deleted

    def delete_expired(self, now: datetime) -> int:
        deleted = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.expires_at < ensure_app_naive_datetime(now))
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return deleted

    def distinct_types(self, user_id: int) -> list[str]:
        rows = (
            self.session.query(NotificationModel.type)
            .filter(NotificationModel.recipient_id == user_id)
            .distinct()
            .order_by(NotificationModel.type)
            .all()
        )
        return [row[0] for row in rows]

    def stats(self, user_id: int, *, now: datetime | None = None) -> dict[str, Any]:
        now = now or now_in_app_timezone()
        base = self._unexpired(user_id, now)
        total = base.count()
        unread = base.filter(NotificationModel.read.is_(False)).count()
        recent = base.filter(
            NotificationModel.created_at
            >= ensure_app_naive_datetime(now - timedelta(days=7))
        ).count()
        by_type_rows = (
            self.session.query(NotificationModel.type, func.count(NotificationModel.id))
            .filter(NotificationModel.recipient_id == user_id)
            .filter(NotificationModel.expires_at >= ensure_app_naive_datetime(now))
            .group_by(NotificationModel.type)
            .all()
        )
        return {
            "total": total,
            "unread": unread,
            "read": total - unread,
            "recent": recent,
            "by_type": {row[0]: row[1] for row in by_type_rows},
        }

    def _unexpired(self, user_id: int, now: datetime | None) -> Query:
        cutoff = ensure_app_naive_datetime(now or now_in_app_timezone())
        return (
            self.session.query(NotificationModel)
            .filter(NotificationModel.recipient_id == user_id)
            .filter(NotificationModel.expires_at >= cutoff)
        )

    @staticmethod
    def _read_values() -> dict:
        return {
            NotificationModel.read: True,
            NotificationModel.read_at: ensure_app_naive_datetime(now_in_app_timezone()),
        }

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationModel,
        notification: Notification,
        *,
        include_creation_fields: bool,
    ) -> None:
        if include_creation_fields:
            model.created_at = (
                ensure_app_naive_datetime(notification.created_at)
                or ensure_app_naive_datetime(now_in_app_timezone())
            )
        model.recipient_id = notification.recipient_id
        model.sender_id = notification.sender_id
        model.type = notification.type
        model.title = notification.title
        model.message = notification.message
        model.related_task_id = notification.related_task_id
        model.related_meeting_id = notification.related_meeting_id
        model.action_url = notification.action_url
        model.action_text = notification.action_text
        model.payload = dict(notification.metadata or {})
        model.read = notification.read
        model.read_at = ensure_app_naive_datetime(notification.read_at)
        model.priority = notification.priority
        model.expires_at = ensure_app_naive_datetime(notification.expires_at)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            recipient_id=model.recipient_id,
            sender_id=model.sender_id,
            type=model.type,
            title=model.title,
            message=model.message,
            related_task_id=model.related_task_id,
            related_meeting_id=model.related_meeting_id,
            action_url=model.action_url,
            action_text=model.action_text,
            metadata=dict(model.payload or {}),
            read=bool(model.read),
            read_at=ensure_app_timezone(model.read_at),
            priority=model.priority,
            expires_at=ensure_app_timezone(model.expires_at),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["NotificationRepository"]
