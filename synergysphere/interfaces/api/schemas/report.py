"""Schemas for report artifacts."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ReportRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    filename: str
    download_url: str
    size_bytes: int
    created_at: datetime | None = None


class ReportGenerated(BaseModel):
    message: str
    filename: str
    download_url: str


__all__ = ["ReportGenerated", "ReportRead"]
