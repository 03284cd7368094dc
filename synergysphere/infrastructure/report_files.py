"""Utility helpers for writing and managing weekly report workbooks."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from io import BytesIO
from pathlib import Path
from uuid import uuid4

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill

from synergysphere.config import get_settings
from synergysphere.domain.entities import ReportArtifact, WeeklyReport

logger = logging.getLogger(__name__)

REPORT_CONTENT_TYPE = (
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
)
REPORT_PREFIX = "weekly-report"
REPORT_EXTENSION = ".xlsx"
DOWNLOAD_URL_PREFIX = "/api/reports/download/"

_SAFE_FILENAME = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*\.xlsx$")
_HEADER_FILL = PatternFill(fill_type="solid", fgColor="4F81BD")
_HEADER_FONT = Font(color="FFFFFFFF", bold=True)
_TITLE_FONT = Font(size=16, bold=True)


def reports_directory() -> Path:
    directory = Path(get_settings().reports_dir)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def download_url(filename: str) -> str:
    return f"{DOWNLOAD_URL_PREFIX}{filename}"


def build_report_filename(generated_at: datetime) -> str:
    """Return a unique filename for a report generated at ``generated_at``."""

    stamp = generated_at.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%S")
    return f"{REPORT_PREFIX}-{stamp}-{uuid4().hex[:8]}{REPORT_EXTENSION}"


def _style_header(row) -> None:
    for cell in row:
        cell.fill = _HEADER_FILL
        cell.font = _HEADER_FONT
        cell.alignment = Alignment(horizontal="center", vertical="center")


def _create_workbook(report: WeeklyReport) -> Workbook:
    workbook = Workbook()
    summary = workbook.active
    summary.title = "Summary"

    summary.append(["Weekly Team Report"])
    summary["A1"].font = _TITLE_FONT
    summary.append(["Generated at", report.generated_at.isoformat()])
    summary.append(["Period start", report.period_start.isoformat()])
    summary.append([])

    summary.append(["Metric", "Value"])
    _style_header(summary[summary.max_row])
    summary.append(["Tasks completed", report.completed_tasks])
    summary.append(["Feedback items", report.feedback_items])
    summary.append(["Active team members", report.active_members])
    summary.append([])

    summary.append(["Team member", "Tasks completed"])
    _style_header(summary[summary.max_row])
    for username, count in sorted(
        report.tasks_by_user.items(), key=lambda item: (-item[1], item[0])
    ):
        summary.append([username, count])
    summary.append([])

    summary.append(["Task", "Author", "Feedback", "Date"])
    _style_header(summary[summary.max_row])
    for excerpt in report.recent_feedback:
        summary.append(
            [
                excerpt.task_title,
                excerpt.username,
                excerpt.content,
                excerpt.created_at.isoformat() if excerpt.created_at else None,
            ]
        )
    summary.column_dimensions["A"].width = 32
    summary.column_dimensions["C"].width = 60

    performance = workbook.create_sheet("Performance")
    performance.append(["Average completion time (days)", report.average_completion_days])
    performance.append([])
    performance.append(["Priority", "Tasks completed"])
    _style_header(performance[performance.max_row])
    for priority, count in report.priority_histogram.items():
        performance.append([priority, count])
    performance.append([])
    performance.append(["Recommendations"])
    _style_header(performance[performance.max_row])
    for recommendation in report.recommendations:
        performance.append([recommendation])
    performance.column_dimensions["A"].width = 64

    return workbook


def write_report_workbook(report: WeeklyReport) -> ReportArtifact:
    """Render ``report`` in memory and flush it to the reports directory."""

    buffer = BytesIO()
    _create_workbook(report).save(buffer)
    data = buffer.getvalue()

    filename = build_report_filename(report.generated_at)
    path = reports_directory() / filename
    path.write_bytes(data)
    logger.info("Weekly report written to %s (%d bytes)", path, len(data))

    return ReportArtifact(
        filename=filename,
        path=str(path),
        download_url=download_url(filename),
        size_bytes=len(data),
        created_at=report.generated_at,
    )


def resolve_report_path(filename: str) -> Path:
    """Return the path of an existing report, rejecting traversal attempts."""

    if not _SAFE_FILENAME.match(filename or "") or ".." in filename:
        raise ValueError("Invalid report filename")
    directory = reports_directory().resolve()
    path = (directory / filename).resolve()
    if path.parent != directory:
        raise ValueError("Invalid report filename")
    if not path.is_file():
        raise FileNotFoundError("Report not found")
    return path


def list_report_files() -> list[ReportArtifact]:
    """Return the stored reports, newest first."""

    artifacts = []
    for path in reports_directory().glob(f"*{REPORT_EXTENSION}"):
        stats = path.stat()
        artifacts.append(
            ReportArtifact(
                filename=path.name,
                path=str(path),
                download_url=download_url(path.name),
                size_bytes=stats.st_size,
                created_at=datetime.fromtimestamp(stats.st_mtime, tz=timezone.utc),
            )
        )
    artifacts.sort(key=lambda artifact: (artifact.created_at, artifact.filename), reverse=True)
    return artifacts


def delete_report_file(filename: str) -> None:
    resolve_report_path(filename).unlink()
    logger.info("Deleted report %s", filename)


__all__ = [
    "REPORT_CONTENT_TYPE",
    "build_report_filename",
    "delete_report_file",
    "download_url",
    "list_report_files",
    "reports_directory",
    "resolve_report_path",
    "write_report_workbook",
]
