"""Endpoints exposing the scheduled jobs and their last runs."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from synergysphere.application.use_cases.jobs import JobRunner, registered_jobs
from synergysphere.domain.entities import User
from synergysphere.infrastructure.database import get_db
from synergysphere.infrastructure.repositories import JobRunRepository
from synergysphere.interfaces.api.dependencies import (
    get_current_active_user,
    require_admin,
)
from synergysphere.interfaces.api.errors import translate_errors
from synergysphere.interfaces.api.schemas import JobRead, JobRunRead

router = APIRouter(prefix="/jobs", tags=["jobs"])


def get_job_runner(request: Request) -> JobRunner:
    return request.app.state.job_runner


@router.get("/", response_model=list[JobRead])
def list_jobs(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[JobRead]:
    """Return the schedule table with the latest run of every job."""

    runs = JobRunRepository(db)
    jobs: list[JobRead] = []
    for definition in registered_jobs():
        last_run = runs.latest_for_job(definition.name)
        jobs.append(
            JobRead(
                name=definition.name,
                cron=definition.cron,
                description=definition.description,
                last_run=JobRunRead.model_validate(last_run) if last_run else None,
            )
        )
    return jobs


@router.post("/{name}/run", response_model=JobRunRead)
async def run_job(
    name: str,
    current_user: User = Depends(require_admin),
    runner: JobRunner = Depends(get_job_runner),
) -> JobRunRead:
    """Trigger ``name`` for the current window; a second call is skipped."""

    with translate_errors():
        run = await runner.run(name)
    return JobRunRead.model_validate(run)
