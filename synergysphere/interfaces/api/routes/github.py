"""GitHub webhook receiver and manual issue import."""

from __future__ import annotations

import json
import logging

import anyio
from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from sqlalchemy.orm import Session

from synergysphere.application.use_cases.integrations import (
    WebhookSignatureError,
    handle_issue_event,
    import_issues as import_issues_uc,
    verify_signature,
)
from synergysphere.config import get_settings
from synergysphere.domain.entities import User
from synergysphere.infrastructure.database import get_db
from synergysphere.infrastructure.realtime import RealtimeBroadcaster
from synergysphere.interfaces.api.dependencies import (
    get_broadcaster,
    get_current_active_user,
)
from synergysphere.interfaces.api.errors import translate_errors
from synergysphere.interfaces.api.schemas import (
    GitHubImportResult,
    GitHubIssueImport,
    TaskRead,
)

router = APIRouter(prefix="/github", tags=["github"])
logger = logging.getLogger(__name__)


@router.post("/webhook")
async def github_webhook(
    request: Request,
    x_github_event: str | None = Header(default=None),
    x_hub_signature_256: str | None = Header(default=None),
    db: Session = Depends(get_db),
    broadcaster: RealtimeBroadcaster = Depends(get_broadcaster),
) -> dict:
    """Apply a signed ``issues`` delivery to the linked tasks."""

    secret = get_settings().github_webhook_secret
    if not secret:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="GitHub webhook secret is not configured",
        )

    body = await request.body()
    try:
        verify_signature(secret, body, x_hub_signature_256)
    except WebhookSignatureError as exc:
        logger.warning("Rejected GitHub webhook with an invalid signature")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)
        ) from exc

    if x_github_event and x_github_event != "issues":
        return {"message": f"Event '{x_github_event}' ignored"}

    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid JSON payload"
        ) from exc

    with translate_errors():
        return await anyio.to_thread.run_sync(
            handle_issue_event, db, broadcaster, payload
        )


@router.post("/import-issues", response_model=GitHubImportResult)
def import_issues(
    payload: GitHubIssueImport,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
    broadcaster: RealtimeBroadcaster = Depends(get_broadcaster),
) -> GitHubImportResult:
    with translate_errors():
        imported, skipped = import_issues_uc(
            db,
            broadcaster,
            actor=current_user,
            repository=payload.repository,
            issues=payload.issues,
        )
    return GitHubImportResult(
        message=f"Imported {len(imported)} issues",
        imported_tasks=[TaskRead.model_validate(task) for task in imported],
        skipped=len(skipped),
    )
