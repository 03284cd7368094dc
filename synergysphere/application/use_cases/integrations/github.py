"""Keep tasks in sync with the GitHub issues they were imported from."""

from __future__ import annotations

import hashlib
import hmac
import logging
from dataclasses import replace
from typing import Any, Mapping, Sequence

from sqlalchemy.orm import Session

from synergysphere.application.use_cases.notifications import notify_github_event
from synergysphere.domain.entities import (
    ACTIVITY_CREATED,
    ACTIVITY_STATUS_CHANGED,
    ACTIVITY_UPDATED,
    TASK_STATUS_DONE,
    TASK_STATUS_TODO,
    Task,
    User,
)
from synergysphere.infrastructure.realtime import RealtimeBroadcaster
from synergysphere.infrastructure.repositories import TaskRepository
from synergysphere.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

SIGNATURE_PREFIX = "sha256="


class WebhookSignatureError(PermissionError):
    """Raised when the webhook signature does not match the payload."""


def sign_payload(secret: str, body: bytes) -> str:
    digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()
    return f"{SIGNATURE_PREFIX}{digest}"


def verify_signature(secret: str, body: bytes, signature: str | None) -> None:
    """Check ``X-Hub-Signature-256`` against the raw request body."""

    if not signature or not hmac.compare_digest(sign_payload(secret, body), signature):
        raise WebhookSignatureError("Invalid signature")


def _repository_name(repository: Mapping[str, Any]) -> str | None:
    owner = (repository.get("owner") or {}).get("login")
    name = repository.get("name")
    if owner and name:
        return f"{owner}/{name}"
    return repository.get("full_name")


def _priority_from_labels(labels: Sequence[str]) -> str:
    if any("high" in label for label in labels):
        return "high"
    if any("low" in label for label in labels):
        return "low"
    return "medium"


def handle_issue_event(
    session: Session,
    broadcaster: RealtimeBroadcaster | None,
    payload: Mapping[str, Any],
) -> dict[str, Any]:
    """Apply an ``issues`` webhook delivery to the linked tasks.

    ``closed`` moves the tasks to done, ``reopened`` back to todo and
    ``edited`` copies title and body. Every linked task's creator is
    notified and a ``github-sync`` event is broadcast.
    """

    if not isinstance(payload, Mapping):
        raise ValueError("Payload must be a JSON object")
    action = payload.get("action")
    issue = payload.get("issue") or {}
    repository_data = payload.get("repository") or {}
    if not isinstance(issue, Mapping) or not isinstance(repository_data, Mapping):
        raise ValueError("Issue and repository must be JSON objects")
    repository = _repository_name(repository_data)
    if not action or not issue.get("id"):
        raise ValueError("Payload is not an issue event")

    task_repository = TaskRepository(session)
    tasks = task_repository.list_by_github_issue(issue["id"], repository=repository)
    if not tasks:
        return {"message": "No linked tasks found", "affectedTasks": 0}

    now = now_in_app_timezone()
    for task in tasks:
        updated = task
        if action == "closed" and task.status != TASK_STATUS_DONE:
            updated = replace(task)
            updated.apply_status(TASK_STATUS_DONE, now=now)
            updated.record_activity(
                ACTIVITY_STATUS_CHANGED, task.creator_id, "Closed via GitHub", now=now
            )
        elif action == "reopened" and task.status == TASK_STATUS_DONE:
            updated = replace(task)
            updated.apply_status(TASK_STATUS_TODO, now=now)
            updated.record_activity(
                ACTIVITY_STATUS_CHANGED, task.creator_id, "Reopened via GitHub", now=now
            )
        elif action == "edited":
            updated = replace(
                task,
                title=(issue.get("title") or task.title)[:200],
                description=issue.get("body") or "",
            )
            updated.record_activity(
                ACTIVITY_UPDATED, task.creator_id, "Updated via GitHub", now=now
            )
        if updated is not task:
            task_repository.update(updated)

        notify_github_event(
            session,
            broadcaster,
            "issue-closed" if action == "closed" else "issue-synced",
            issue,
            task.creator_id,
            metadata={"taskId": task.id, "action": action},
        )

    summary = {
        "action": action,
        "issue": issue.get("title"),
        "repository": repository,
        "affectedTasks": len(tasks),
    }
    if broadcaster is not None:
        broadcaster.emit("github-sync", {"type": "webhook-received", **summary})
    logger.info("GitHub %s event applied to %d tasks", action, len(tasks))
    return {"message": "Webhook processed successfully", **summary}


def import_issues(
    session: Session,
    broadcaster: RealtimeBroadcaster | None,
    *,
    actor: User,
    repository: str,
    issues: Sequence[Mapping[str, Any]],
) -> tuple[list[Task], list[Mapping[str, Any]]]:
    """Create one task per issue not yet linked to a task.

    Returns the created tasks and the skipped issues.
    """

    if not repository or "/" not in repository:
        raise ValueError("Repository must be given as 'owner/name'")

    task_repository = TaskRepository(session)
    imported: list[Task] = []
    skipped: list[Mapping[str, Any]] = []
    for issue in issues:
        issue_id = issue.get("id")
        title = (issue.get("title") or "").strip()
        if not issue_id or not title:
            raise ValueError("Every issue needs an id and a title")
        if task_repository.list_by_github_issue(issue_id, repository=repository):
            skipped.append(issue)
            continue

        labels = [
            label.get("name", "") if isinstance(label, Mapping) else str(label)
            for label in issue.get("labels") or []
        ]
        task = Task(
            id=None,
            title=title[:200],
            description=issue.get("body") or "",
            priority=_priority_from_labels(labels),
            creator_id=actor.id,
            tags=[label for label in labels if label],
            github_issue_id=issue_id,
            github_issue_number=issue.get("number"),
            github_repository=repository,
        )
        task.record_activity(
            ACTIVITY_CREATED,
            actor.id,
            "Imported from GitHub issue",
            now=now_in_app_timezone(),
        )
        task = task_repository.create(task)
        imported.append(task)
        notify_github_event(session, broadcaster, "issue-imported", issue, actor.id)

    if broadcaster is not None:
        broadcaster.emit(
            "github-sync",
            {
                "type": "issues-imported",
                "imported": len(imported),
                "skipped": len(skipped),
                "repository": repository,
            },
        )
    return imported, skipped


__all__ = [
    "WebhookSignatureError",
    "handle_issue_event",
    "import_issues",
    "sign_payload",
    "verify_signature",
]
