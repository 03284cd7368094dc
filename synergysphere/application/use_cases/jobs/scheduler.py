"""APScheduler wiring for the registered cron jobs."""

from __future__ import annotations

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from synergysphere.config import get_settings

from .registry import registered_jobs
from .runner import JobRunner

logger = logging.getLogger(__name__)


def create_scheduler(runner: JobRunner, *, timezone: str | None = None) -> AsyncIOScheduler:
    """Return an (unstarted) scheduler with one cron trigger per registered job."""

    tz = timezone or get_settings().scheduler_timezone
    scheduler = AsyncIOScheduler(timezone=tz)
    for definition in registered_jobs():
        scheduler.add_job(
            runner.run_scheduled,
            trigger=CronTrigger.from_crontab(definition.cron, timezone=tz),
            args=[definition.name],
            id=definition.name,
            name=definition.description or definition.name,
            max_instances=1,
            coalesce=True,
            replace_existing=True,
        )
    logger.info("Scheduler configured with %d jobs", len(scheduler.get_jobs()))
    return scheduler


__all__ = ["create_scheduler"]
