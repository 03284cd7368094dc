"""Use cases for linking third-party accounts."""

from __future__ import annotations

from sqlalchemy.orm import Session

from synergysphere.infrastructure.credentials import CredentialVault


def connect_provider(
    session: Session,
    *,
    user_id: int,
    provider: str,
    access_token: str,
    refresh_token: str | None = None,
    account: str | None = None,
) -> dict[str, object]:
    CredentialVault(session).store(
        user_id,
        provider,
        access_token=access_token,
        refresh_token=refresh_token,
        account=account,
    )
    return {"provider": provider, "account": account, "connected": True}


def list_connected_providers(session: Session, *, user_id: int) -> list[dict[str, object]]:
    return CredentialVault(session).providers(user_id)


def disconnect_provider(session: Session, *, user_id: int, provider: str) -> None:
    if not CredentialVault(session).remove(user_id, provider):
        raise LookupError(f"No {provider} account connected")
