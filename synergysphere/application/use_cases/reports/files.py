"""Use cases for browsing and removing generated reports."""

from __future__ import annotations

from pathlib import Path

from synergysphere.domain.entities import ReportArtifact
from synergysphere.infrastructure.report_files import (
    delete_report_file,
    list_report_files,
    resolve_report_path,
)


def list_reports() -> list[ReportArtifact]:
    return list_report_files()


def get_report_path(filename: str) -> Path:
    """Return the stored report ``filename``.

    Raises ``ValueError`` for names that could escape the reports directory
    and ``FileNotFoundError`` when the report does not exist.
    """

    return resolve_report_path(filename)


def delete_report(filename: str) -> None:
    delete_report_file(filename)


__all__ = ["delete_report", "get_report_path", "list_reports"]
