"""Tests for encrypted integration credentials and report file storage."""

from __future__ import annotations

import pytest
from cryptography.fernet import Fernet
from openpyxl import load_workbook

from synergysphere.application.use_cases.reports import build_weekly_report
from synergysphere.application.use_cases.reports.weekly_report import RECOMMENDATIONS
from synergysphere.application.use_cases.tasks import (
    add_feedback,
    create_task,
    update_task,
)
from synergysphere.infrastructure.credentials import (
    CredentialConfigurationError,
    CredentialVault,
)
from synergysphere.infrastructure.models import IntegrationCredentialModel
from synergysphere.infrastructure.report_files import (
    resolve_report_path,
    write_report_workbook,
)


def test_tokens_are_encrypted_at_rest(session, alice):
    vault = CredentialVault(session)
    vault.store(alice.id, "github", access_token="gho_plain", account="alice-gh")

    row = session.query(IntegrationCredentialModel).one()
    assert "gho_plain" not in row.access_token_encrypted
    assert row.refresh_token_encrypted is None

    credential = vault.get(alice.id, "github")
    assert credential.access_token == "gho_plain"
    assert "gho_plain" not in repr(credential)
    assert vault.providers(alice.id)[0]["account"] == "alice-gh"


def test_storing_again_replaces_the_previous_tokens(session, alice):
    vault = CredentialVault(session)
    vault.store(alice.id, "google", access_token="first")
    vault.store(alice.id, "google", access_token="second", refresh_token="refresh")

    assert session.query(IntegrationCredentialModel).count() == 1
    credential = vault.get(alice.id, "google")
    assert (credential.access_token, credential.refresh_token) == ("second", "refresh")


def test_vault_rejects_unknown_providers_and_missing_keys(session, alice):
    with pytest.raises(ValueError):
        CredentialVault(session).store(alice.id, "dropbox", access_token="x")
    with pytest.raises(CredentialConfigurationError):
        CredentialVault(session, key="")
    with pytest.raises(CredentialConfigurationError):
        CredentialVault(session, key="not-a-fernet-key")


def test_tokens_cannot_be_read_with_another_key(session, alice):
    CredentialVault(session).store(alice.id, "github", access_token="secret")
    other = CredentialVault(session, key=Fernet.generate_key().decode())

    with pytest.raises(CredentialConfigurationError):
        other.get(alice.id, "github")


def test_weekly_report_workbook_contents(session, alice, bob):
    task = create_task(
        session, None, actor=alice, title="Done thing", assignee_id=bob.id, priority="high"
    )
    update_task(session, None, task_id=task.id, actor=bob, changes={"status": "done"})
    add_feedback(session, None, task_id=task.id, actor=bob, content="Wrapped up")

    report = build_weekly_report(session)
    assert report.completed_tasks == 1
    assert report.feedback_items == 1
    assert report.active_members == 2
    assert report.tasks_by_user == {"bob": 1}
    assert report.priority_histogram["high"] == 1
    assert report.recent_feedback[0].content == "Wrapped up"
    assert report.recommendations == list(RECOMMENDATIONS)

    artifact = write_report_workbook(report)
    assert artifact.download_url == f"/api/reports/download/{artifact.filename}"
    workbook = load_workbook(artifact.path)
    assert workbook.sheetnames == ["Summary", "Performance"]


@pytest.mark.parametrize(
    "filename",
    ["../secrets.xlsx", "..xlsx", "report.txt", "/etc/passwd", "", "nested/report.xlsx"],
)
def test_report_paths_reject_traversal(filename):
    with pytest.raises(ValueError):
        resolve_report_path(filename)


def test_missing_report_is_not_found():
    with pytest.raises(FileNotFoundError):
        resolve_report_path("weekly-report-missing.xlsx")
