"""Execute registered jobs at most once per invocation window."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

import anyio
from sqlalchemy.orm import Session

from synergysphere.domain.entities import (
    JOB_STATUS_FAILED,
    JOB_STATUS_SKIPPED,
    JOB_STATUS_SUCCESS,
    JobRun,
)
from synergysphere.infrastructure.realtime import RealtimeBroadcaster
from synergysphere.infrastructure.repositories import JobRunRepository
from synergysphere.utils import now_in_app_timezone

from .registry import JobDefinition, get_job

logger = logging.getLogger(__name__)


class JobRunner:
    """Run jobs behind an idempotency key claimed in the ``job_run`` table.

    The key is recorded before the job body starts, so a restart or an
    overlapping trigger for the same window is skipped instead of repeating
    side effects. Failures are logged and stored on the run, never retried.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        broadcaster: RealtimeBroadcaster | None,
    ) -> None:
        self._session_factory = session_factory
        self._broadcaster = broadcaster

    async def run(self, name: str, now: datetime | None = None) -> JobRun:
        """Run job ``name`` for the window containing ``now``.

        Raises ``LookupError`` for unknown jobs; any other error is captured.
        """

        definition = get_job(name)
        now = now or now_in_app_timezone()
        return await anyio.to_thread.run_sync(self.run_sync, definition, now)

    async def run_scheduled(self, name: str) -> None:
        """Entry point used by the scheduler; never raises."""

        try:
            await self.run(name)
        except Exception:
            logger.exception("Scheduled job %s could not be started", name)

    def run_sync(self, definition: JobDefinition, now: datetime) -> JobRun:
        key = definition.idempotency_key(now)
        session = self._session_factory()
        try:
            runs = JobRunRepository(session)
            claimed = runs.claim(definition.name, key)
            if claimed is None:
                logger.info("Job %s already ran for %s; skipping", definition.name, key)
                return JobRun(
                    id=None,
                    job_name=definition.name,
                    idempotency_key=key,
                    status=JOB_STATUS_SKIPPED,
                )

            logger.info("Running job %s (%s)", definition.name, key)
            try:
                result = definition.func(session, self._broadcaster, now)
            except Exception as exc:
                session.rollback()
                logger.exception("Job %s failed", definition.name)
                return runs.finish(claimed.id, status=JOB_STATUS_FAILED, error=str(exc))
            return runs.finish(
                claimed.id,
                status=JOB_STATUS_SUCCESS,
                result=result if isinstance(result, dict) else {"output": str(result)},
            )
        finally:
            session.close()


__all__ = ["JobRunner"]
