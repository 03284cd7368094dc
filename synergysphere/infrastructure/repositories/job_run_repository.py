"""Persistence helpers for scheduled job runs."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from synergysphere.domain.entities import JobRun
from synergysphere.infrastructure.models import JobRunModel
from synergysphere.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class JobRunRepository:
    """Claim idempotency keys and record the outcome of job executions."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def claim(self, job_name: str, idempotency_key: str) -> JobRun | None:
        """Insert a ``running`` row for ``idempotency_key``.

        Returns ``None`` when the key was already claimed by an earlier run.
        """

        model = JobRunModel(
            job_name=job_name,
            idempotency_key=idempotency_key,
            status="running",
            started_at=ensure_app_naive_datetime(now_in_app_timezone()),
            result={},
        )
        self.session.add(model)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            return None
        self.session.refresh(model)
        return self._to_entity(model)

    def finish(
        self,
        run_id: int,
        *,
        status: str,
        result: dict[str, Any] | None = None,
        error: str | None = None,
    ) -> JobRun:
        model = self.session.get(JobRunModel, run_id)
        if model is None:
            msg = f"Job run with id {run_id} not found"
            raise LookupError(msg)
        model.status = status
        model.result = dict(result or {})
        model.error = error
        model.finished_at = ensure_app_naive_datetime(now_in_app_timezone())
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def get_by_key(self, idempotency_key: str) -> JobRun | None:
        model = (
            self.session.query(JobRunModel)
            .filter(JobRunModel.idempotency_key == idempotency_key)
            .first()
        )
        return self._to_entity(model) if model else None

    def latest_for_job(self, job_name: str) -> JobRun | None:
        model = (
            self.session.query(JobRunModel)
            .filter(JobRunModel.job_name == job_name)
            .order_by(JobRunModel.started_at.desc(), JobRunModel.id.desc())
            .first()
        )
        return self._to_entity(model) if model else None

    def list_recent(self, *, limit: int = 50) -> Sequence[JobRun]:
        query = (
            self.session.query(JobRunModel)
            .order_by(JobRunModel.started_at.desc(), JobRunModel.id.desc())
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: JobRunModel) -> JobRun:
        return JobRun(
            id=model.id,
            job_name=model.job_name,
            idempotency_key=model.idempotency_key,
            status=model.status,
            started_at=ensure_app_timezone(model.started_at),
            finished_at=ensure_app_timezone(model.finished_at),
            result=dict(model.result or {}),
            error=model.error,
        )


__all__ = ["JobRunRepository"]
