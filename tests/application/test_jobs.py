"""Tests for scheduled job bodies, invocation windows and the idempotent runner."""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone

from synergysphere.application.use_cases.jobs import (
    JobDefinition,
    JobRunner,
    check_overdue_tasks,
    daily_window,
    five_minute_window,
    get_job,
    hourly_window,
    iso_week_window,
    registered_jobs,
    send_meeting_reminders,
    send_weekly_report,
)
from synergysphere.application.use_cases.tasks import create_task
from synergysphere.domain.entities import Meeting, MeetingAttendee
from synergysphere.infrastructure.database import SessionLocal
from synergysphere.infrastructure.report_files import list_report_files
from synergysphere.infrastructure.repositories import (
    JobRunRepository,
    MeetingRepository,
    NotificationRepository,
)
from synergysphere.utils import now_in_app_timezone


def _types(session, user_id):
    items, _ = NotificationRepository(session).list_for_user(user_id, limit=None)
    return [item.type for item in items]


def test_schedule_table():
    schedule = {job.name: job.cron for job in registered_jobs()}
    assert schedule == {
        "weekly-report": "0 17 * * 5",
        "meeting-reminders": "*/5 * * * *",
        "overdue-sweep": "0 * * * *",
        "notification-cleanup": "0 2 * * *",
    }


def test_windows_derive_stable_keys():
    moment = datetime(2026, 10, 16, 17, 3, 59, tzinfo=timezone.utc)

    assert iso_week_window(moment) == "2026-W42"
    assert five_minute_window(moment) == "2026-10-16T17:00"
    assert hourly_window(moment) == "2026-10-16T17"
    assert daily_window(moment) == "2026-10-16"
    assert get_job("weekly-report").idempotency_key(moment) == "weekly-report:2026-W42"


def test_weekly_report_called_twice_produces_two_batches(session, alice, bob):
    first = send_weekly_report(session, None)
    second = send_weekly_report(session, None)

    assert first["filename"] != second["filename"]
    filenames = {report.filename for report in list_report_files()}
    assert {first["filename"], second["filename"]} <= filenames
    assert _types(session, alice.id).count("weekly-report-ready") == 2
    assert _types(session, bob.id).count("weekly-report-ready") == 2


def test_overdue_sweep_notifies_each_recipient_on_every_call(session, alice, bob):
    now = now_in_app_timezone()
    create_task(
        session,
        None,
        actor=alice,
        title="Late",
        assignee_id=bob.id,
        due_date=now - timedelta(days=1),
    )
    create_task(session, None, actor=alice, title="On time", due_date=now + timedelta(days=1))
    create_task(
        session,
        None,
        actor=alice,
        title="Finished",
        status="done",
        due_date=now - timedelta(days=1),
    )
    baseline_bob = len(_types(session, bob.id))

    for _ in range(2):
        result = check_overdue_tasks(session, None, now)
        assert result == {"overdueTasks": 1, "notifications": 2}

    assert len(_types(session, bob.id)) == baseline_bob + 2
    assert _types(session, alice.id).count("task-updated") == 2


def test_overdue_sweep_ignores_unassigned_tasks(session, alice):
    now = now_in_app_timezone()
    create_task(
        session, None, actor=alice, title="Nobody's", due_date=now - timedelta(days=1)
    )
    create_task(
        session,
        None,
        actor=alice,
        title="My own",
        assignee_id=alice.id,
        due_date=now - timedelta(days=1),
    )

    result = check_overdue_tasks(session, None, now)

    assert result == {"overdueTasks": 2, "notifications": 1}
    assert _types(session, alice.id) == ["task-updated"]


def test_meeting_reminders_skip_declined_attendees(session, broadcaster, alice, bob, admin):
    now = now_in_app_timezone()
    start = now + timedelta(minutes=20)
    meeting = MeetingRepository(session).create(
        Meeting(
            id=None,
            title="Sync",
            start_time=start,
            end_time=start + timedelta(minutes=30),
            organizer_id=alice.id,
            attendees=[
                MeetingAttendee(user_id=alice.id, status="accepted"),
                MeetingAttendee(user_id=bob.id),
                MeetingAttendee(user_id=admin.id, status="declined"),
            ],
        )
    )
    MeetingRepository(session).create(
        Meeting(
            id=None,
            title="Later",
            start_time=now + timedelta(hours=2),
            end_time=now + timedelta(hours=3),
            organizer_id=alice.id,
            attendees=[MeetingAttendee(user_id=alice.id, status="accepted")],
        )
    )

    result = send_meeting_reminders(session, broadcaster, now)

    assert result == {"meetings": 1, "reminders": 2}
    assert "meeting-reminder" in _types(session, bob.id)
    assert "meeting-reminder" not in _types(session, admin.id)
    rooms = [room for event, room, _ in broadcaster.events if event == "meeting-reminder"]
    assert rooms == [f"user-{alice.id}", f"user-{bob.id}"]
    payload = broadcaster.events[-1][2]
    assert payload["meetingId"] == meeting.id


def test_runner_skips_a_second_run_in_the_same_window(alice):
    runner = JobRunner(SessionLocal, None)
    now = now_in_app_timezone()

    first = asyncio.run(runner.run("weekly-report", now))
    second = asyncio.run(runner.run("weekly-report", now))

    assert first.status == "success"
    assert first.result["filename"].endswith(".xlsx")
    assert second.status == "skipped"
    with SessionLocal() as session:
        assert _types(session, alice.id).count("weekly-report-ready") == 1
        latest = JobRunRepository(session).latest_for_job("weekly-report")
        assert latest.idempotency_key == f"weekly-report:{iso_week_window(now)}"


def test_runner_records_failures_without_raising():
    def explode(session, broadcaster, now):
        raise RuntimeError("boom")

    definition = JobDefinition(
        name="exploding", cron="* * * * *", window=daily_window, func=explode
    )
    runner = JobRunner(SessionLocal, None)

    run = runner.run_sync(definition, now_in_app_timezone())

    assert run.status == "failed"
    assert run.error == "boom"
    assert run.finished_at is not None


def test_run_scheduled_swallows_unknown_jobs():
    runner = JobRunner(SessionLocal, None)

    assert asyncio.run(runner.run_scheduled("does-not-exist")) is None
