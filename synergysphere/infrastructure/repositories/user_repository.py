"""Persistence layer for user data."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from synergysphere.domain.entities import User
from synergysphere.infrastructure.models import UserModel
from synergysphere.utils import ensure_app_timezone


class UserRepository:
    """Provide CRUD operations for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(self, skip: int = 0, limit: int = 100) -> Sequence[User]:
        query = (
            self.session.query(UserModel)
            .order_by(UserModel.id)
            .offset(skip)
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    def list_active(self) -> Sequence[User]:
        query = (
            self.session.query(UserModel)
            .filter(UserModel.is_active.is_(True))
            .order_by(UserModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def count_active(self) -> int:
        return (
            self.session.query(func.count(UserModel.id))
            .filter(UserModel.is_active.is_(True))
            .scalar()
            or 0
        )

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = (
            self.session.query(UserModel)
            .filter(func.lower(UserModel.email) == email.lower())
            .first()
        )
        return self._to_entity(model) if model else None

    def get_by_username(self, username: str) -> User | None:
        model = self.session.query(UserModel).filter_by(username=username).first()
        return self._to_entity(model) if model else None

    def get_map_by_ids(self, user_ids: Sequence[int]) -> dict[int, User]:
        if not user_ids:
            return {}
        unique_ids = {int(user_id) for user_id in user_ids}
        query = self.session.query(UserModel).filter(UserModel.id.in_(unique_ids))
        return {model.id: self._to_entity(model) for model in query.all()}

    def create(self, user: User) -> User:
        model = UserModel()
        self._apply_entity_to_model(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, user: User) -> User:
        model = self.session.get(UserModel, user.id)
        if not model:
            msg = f"User with id {user.id} not found"
            raise LookupError(msg)
        self._apply_entity_to_model(model, user)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            username=model.username,
            email=model.email,
            password=model.password,
            role=model.role,
            is_active=model.is_active,
            created_at=ensure_app_timezone(model.created_at),
        )

    @staticmethod
    def _apply_entity_to_model(model: UserModel, user: User) -> None:
        model.username = user.username
        model.email = user.email
        model.password = user.password
        model.role = user.role
        model.is_active = user.is_active


__all__ = ["UserRepository"]
