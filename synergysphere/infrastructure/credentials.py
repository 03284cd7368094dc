"""Encrypted storage for third-party integration tokens."""

from __future__ import annotations

import logging

from cryptography.fernet import Fernet, InvalidToken
from sqlalchemy.orm import Session

from synergysphere.config import get_settings
from synergysphere.domain.entities import PROVIDERS, IntegrationCredential
from synergysphere.infrastructure.repositories import IntegrationCredentialRepository
from synergysphere.utils import ensure_app_timezone

logger = logging.getLogger(__name__)


class CredentialConfigurationError(RuntimeError):
    """Raised when no encryption key is configured for the credential store."""


class CredentialVault:
    """Narrow interface over :class:`IntegrationCredentialRepository`.

    Tokens are encrypted with Fernet before they reach the database and are
    only decrypted when explicitly requested for a given user and provider.
    Callers never see the ciphertext and user records never carry tokens.
    """

    def __init__(self, session: Session, *, key: str | None = None) -> None:
        key = key if key is not None else get_settings().credentials_encryption_key
        if not key:
            raise CredentialConfigurationError(
                "CREDENTIALS_ENCRYPTION_KEY is not configured"
            )
        try:
            self._fernet = Fernet(key.encode() if isinstance(key, str) else key)
        except (TypeError, ValueError) as exc:
            raise CredentialConfigurationError(
                "CREDENTIALS_ENCRYPTION_KEY is not a valid Fernet key"
            ) from exc
        self._repository = IntegrationCredentialRepository(session)

    def store(
        self,
        user_id: int,
        provider: str,
        *,
        access_token: str,
        refresh_token: str | None = None,
        account: str | None = None,
    ) -> IntegrationCredential:
        """Encrypt and persist the tokens for ``provider``, replacing older ones."""

        if provider not in PROVIDERS:
            raise ValueError(f"Unsupported provider '{provider}'")
        if not access_token:
            raise ValueError("access_token is required")

        self._repository.upsert(
            user_id=user_id,
            provider=provider,
            account=account,
            access_token_encrypted=self._encrypt(access_token),
            refresh_token_encrypted=self._encrypt(refresh_token) if refresh_token else None,
        )
        logger.info("Stored %s credentials for user %s", provider, user_id)
        return IntegrationCredential(
            id=None,
            user_id=user_id,
            provider=provider,
            access_token=access_token,
            refresh_token=refresh_token,
            account=account,
        )

    def get(self, user_id: int, provider: str) -> IntegrationCredential | None:
        """Return the decrypted credential or ``None`` when nothing is stored."""

        row = self._repository.get(user_id, provider)
        if row is None:
            return None
        return IntegrationCredential(
            id=row.id,
            user_id=row.user_id,
            provider=row.provider,
            access_token=self._decrypt(row.access_token_encrypted),
            refresh_token=(
                self._decrypt(row.refresh_token_encrypted)
                if row.refresh_token_encrypted
                else None
            ),
            account=row.account,
            created_at=ensure_app_timezone(row.created_at),
            updated_at=ensure_app_timezone(row.updated_at),
        )

    def providers(self, user_id: int) -> list[dict[str, object]]:
        """Return the linked providers for ``user_id`` without any token."""

        return [
            {
                "provider": row.provider,
                "account": row.account,
                "updated_at": ensure_app_timezone(row.updated_at or row.created_at),
            }
            for row in self._repository.list_for_user(user_id)
        ]

    def remove(self, user_id: int, provider: str) -> bool:
        return self._repository.delete(user_id, provider)

    def _encrypt(self, value: str) -> str:
        return self._fernet.encrypt(value.encode("utf-8")).decode("ascii")

    def _decrypt(self, value: str) -> str:
        try:
            return self._fernet.decrypt(value.encode("ascii")).decode("utf-8")
        except InvalidToken as exc:
            raise CredentialConfigurationError(
                "Stored credential cannot be decrypted with the configured key"
            ) from exc


__all__ = ["CredentialConfigurationError", "CredentialVault"]
