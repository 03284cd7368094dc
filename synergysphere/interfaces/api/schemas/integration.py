"""Schemas for third-party integrations."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from .task import TaskRead


class CredentialCreate(BaseModel):
    access_token: str = Field(..., min_length=1)
    refresh_token: str | None = None
    account: str | None = Field(default=None, max_length=200)


class ConnectedProvider(BaseModel):
    provider: Literal["github", "google"]
    account: str | None = None
    updated_at: datetime | None = None


class GitHubIssueImport(BaseModel):
    repository: str = Field(..., description="Repository as 'owner/name'")
    issues: list[dict[str, Any]] = Field(default_factory=list)


class GitHubImportResult(BaseModel):
    message: str
    imported_tasks: list[TaskRead]
    skipped: int


__all__ = [
    "ConnectedProvider",
    "CredentialCreate",
    "GitHubImportResult",
    "GitHubIssueImport",
]
