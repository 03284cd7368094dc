"""Invocation windows used to derive job idempotency keys."""

from __future__ import annotations

from datetime import datetime, timezone


def _utc(now: datetime) -> datetime:
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def iso_week_window(now: datetime) -> str:
    """``2026-W42`` for any moment of ISO week 42 of 2026."""

    year, week, _ = _utc(now).isocalendar()
    return f"{year}-W{week:02d}"


def five_minute_window(now: datetime) -> str:
    """Minute-resolution timestamp floored to the enclosing five minutes."""

    moment = _utc(now)
    return moment.replace(minute=moment.minute - moment.minute % 5).strftime(
        "%Y-%m-%dT%H:%M"
    )


def hourly_window(now: datetime) -> str:
    return _utc(now).strftime("%Y-%m-%dT%H")


def daily_window(now: datetime) -> str:
    return _utc(now).strftime("%Y-%m-%d")


__all__ = ["daily_window", "five_minute_window", "hourly_window", "iso_week_window"]
