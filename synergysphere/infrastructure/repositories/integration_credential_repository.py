"""Persistence helpers for encrypted integration credentials."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from synergysphere.infrastructure.models import IntegrationCredentialModel


class IntegrationCredentialRepository:
    """Store ciphertext rows; encryption is handled by the credential vault."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int, provider: str) -> IntegrationCredentialModel | None:
        return (
            self.session.query(IntegrationCredentialModel)
            .filter_by(user_id=user_id, provider=provider)
            .first()
        )

    def list_for_user(self, user_id: int) -> Sequence[IntegrationCredentialModel]:
        return (
            self.session.query(IntegrationCredentialModel)
            .filter_by(user_id=user_id)
            .order_by(IntegrationCredentialModel.provider)
            .all()
        )

    def upsert(
        self,
        *,
        user_id: int,
        provider: str,
        account: str | None,
        access_token_encrypted: str,
        refresh_token_encrypted: str | None,
    ) -> IntegrationCredentialModel:
        model = self.get(user_id, provider)
        if model is None:
            model = IntegrationCredentialModel(user_id=user_id, provider=provider)
        model.account = account
        model.access_token_encrypted = access_token_encrypted
        model.refresh_token_encrypted = refresh_token_encrypted
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return model

    def delete(self, user_id: int, provider: str) -> bool:
        model = self.get(user_id, provider)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True


__all__ = ["IntegrationCredentialRepository"]
