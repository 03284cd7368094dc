"""Timezone helpers.

The domain layer works with aware datetimes in the configured
``app_timezone``. Database columns store the same instant as a naive
wall-clock value in that zone.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone, tzinfo
from functools import lru_cache

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from synergysphere.config import get_settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _app_timezone() -> tzinfo:
    name = (get_settings().app_timezone or "").strip() or "UTC"
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r, using UTC", name)
        return timezone.utc


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Column default: the current wall-clock time in the app timezone."""

    return now_in_app_timezone().replace(tzinfo=None)


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Express ``value`` in the app timezone; naive values are taken as local."""

    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=_app_timezone())
    return value.astimezone(_app_timezone())


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    localized = ensure_app_timezone(value)
    return localized.replace(tzinfo=None) if localized is not None else None
