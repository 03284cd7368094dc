"""Domain entity for third-party credentials linked to a user."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

PROVIDER_GITHUB = "github"
PROVIDER_GOOGLE = "google"
PROVIDERS = (PROVIDER_GITHUB, PROVIDER_GOOGLE)


@dataclass
class IntegrationCredential:
    """Tokens issued by an external provider, held in plaintext only in memory."""

    id: int | None
    user_id: int
    provider: str
    access_token: str
    refresh_token: str | None = None
    account: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __repr__(self) -> str:
        return (
            f"IntegrationCredential(id={self.id!r}, user_id={self.user_id!r}, "
            f"provider={self.provider!r}, account={self.account!r})"
        )


__all__ = [
    "IntegrationCredential",
    "PROVIDERS",
    "PROVIDER_GITHUB",
    "PROVIDER_GOOGLE",
]
