"""Endpoints for linking third-party accounts to the current user."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from synergysphere.application.use_cases.integrations import (
    connect_provider,
    disconnect_provider,
    list_connected_providers,
)
from synergysphere.domain.entities import User
from synergysphere.infrastructure.credentials import CredentialConfigurationError
from synergysphere.infrastructure.database import get_db
from synergysphere.interfaces.api.dependencies import get_current_active_user
from synergysphere.interfaces.api.errors import translate_errors
from synergysphere.interfaces.api.schemas import ConnectedProvider, CredentialCreate

router = APIRouter(prefix="/integrations", tags=["integrations"])


@contextmanager
def _vault_errors() -> Iterator[None]:
    try:
        with translate_errors():
            yield
    except CredentialConfigurationError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        ) from exc


@router.get("/", response_model=list[ConnectedProvider])
def list_integrations(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[ConnectedProvider]:
    with _vault_errors():
        providers = list_connected_providers(db, user_id=current_user.id)
    return [ConnectedProvider(**provider) for provider in providers]


@router.put("/{provider}", response_model=ConnectedProvider)
def store_credentials(
    provider: str,
    payload: CredentialCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> ConnectedProvider:
    """Encrypt and store the tokens for ``provider``; tokens are never echoed."""

    with _vault_errors():
        connect_provider(
            db,
            user_id=current_user.id,
            provider=provider,
            access_token=payload.access_token,
            refresh_token=payload.refresh_token,
            account=payload.account,
        )
        providers = list_connected_providers(db, user_id=current_user.id)
    stored = next(item for item in providers if item["provider"] == provider)
    return ConnectedProvider(**stored)


@router.delete("/{provider}", status_code=status.HTTP_204_NO_CONTENT)
def remove_credentials(
    provider: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> Response:
    with _vault_errors():
        disconnect_provider(db, user_id=current_user.id, provider=provider)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
