"""Endpoints for generating and downloading weekly reports."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from synergysphere.application.use_cases.reports import (
    delete_report as delete_report_uc,
    generate_weekly_report,
    get_report_path,
    list_reports as list_reports_uc,
)
from synergysphere.domain.entities import User
from synergysphere.infrastructure.database import get_db
from synergysphere.infrastructure.realtime import RealtimeBroadcaster
from synergysphere.infrastructure.report_files import REPORT_CONTENT_TYPE
from synergysphere.interfaces.api.dependencies import (
    get_broadcaster,
    get_current_active_user,
)
from synergysphere.interfaces.api.errors import translate_errors
from synergysphere.interfaces.api.schemas import ReportGenerated, ReportRead

router = APIRouter(prefix="/reports", tags=["reports"])


@router.post("/generate", response_model=ReportGenerated)
def generate_report(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    broadcaster: RealtimeBroadcaster = Depends(get_broadcaster),
) -> ReportGenerated:
    """Build the weekly report now instead of waiting for Friday."""

    artifact = generate_weekly_report(db, broadcaster)
    return ReportGenerated(
        message="Weekly report generated successfully",
        filename=artifact.filename,
        download_url=artifact.download_url,
    )


@router.get("/", response_model=list[ReportRead])
@router.get("/list", response_model=list[ReportRead], include_in_schema=False)
def list_reports(
    current_user: User = Depends(get_current_active_user),
) -> list[ReportRead]:
    return [ReportRead.model_validate(report) for report in list_reports_uc()]


@router.get("/download/{filename}")
def download_report(
    filename: str,
    current_user: User = Depends(get_current_active_user),
) -> FileResponse:
    with translate_errors():
        path = get_report_path(filename)
    return FileResponse(path, media_type=REPORT_CONTENT_TYPE, filename=path.name)


@router.delete("/{filename}", status_code=status.HTTP_204_NO_CONTENT)
def delete_report(
    filename: str,
    current_user: User = Depends(get_current_active_user),
) -> Response:
    with translate_errors():
        delete_report_uc(filename)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
