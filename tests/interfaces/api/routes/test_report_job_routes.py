"""Tests for report download endpoints and manual job triggers."""

from __future__ import annotations

from fastapi.testclient import TestClient


def test_generate_list_download_and_delete(client: TestClient, alice, headers_for) -> None:
    headers = headers_for(alice)

    generated = client.post("/api/reports/generate", headers=headers)
    assert generated.status_code == 200
    filename = generated.json()["filename"]
    assert generated.json()["download_url"] == f"/api/reports/download/{filename}"

    listed = client.get("/api/reports/", headers=headers).json()
    assert filename in [report["filename"] for report in listed]

    download = client.get(f"/api/reports/download/{filename}", headers=headers)
    assert download.status_code == 200
    assert download.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert download.content[:2] == b"PK"

    notifications = client.get("/api/notifications/", headers=headers).json()
    assert notifications["notifications"][0]["type"] == "weekly-report-ready"

    assert client.delete(f"/api/reports/{filename}", headers=headers).status_code == 204
    assert client.get(f"/api/reports/download/{filename}", headers=headers).status_code == 404


def test_download_rejects_invalid_names(client: TestClient, alice, headers_for) -> None:
    response = client.get("/api/reports/download/..%2Fsecrets.xlsx", headers=headers_for(alice))
    assert response.status_code in (400, 404)
    response = client.get("/api/reports/download/report.txt", headers=headers_for(alice))
    assert response.status_code == 400


def test_jobs_listing_and_admin_trigger(
    client: TestClient, alice, admin, headers_for
) -> None:
    jobs = client.get("/api/jobs/", headers=headers_for(alice)).json()
    assert {job["name"] for job in jobs} == {
        "weekly-report",
        "meeting-reminders",
        "overdue-sweep",
        "notification-cleanup",
    }
    assert all(job["last_run"] is None for job in jobs)

    assert client.post("/api/jobs/overdue-sweep/run", headers=headers_for(alice)).status_code == 403

    first = client.post("/api/jobs/overdue-sweep/run", headers=headers_for(admin))
    second = client.post("/api/jobs/overdue-sweep/run", headers=headers_for(admin))
    assert first.json()["status"] == "success"
    assert second.json()["status"] == "skipped"

    jobs = {job["name"]: job for job in client.get("/api/jobs/", headers=headers_for(admin)).json()}
    assert jobs["overdue-sweep"]["last_run"]["status"] == "success"

    assert client.post("/api/jobs/unknown/run", headers=headers_for(admin)).status_code == 404
