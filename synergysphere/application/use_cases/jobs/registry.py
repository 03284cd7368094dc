"""Registry of the cron jobs run by the scheduler."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable

from sqlalchemy.orm import Session

from synergysphere.infrastructure.realtime import RealtimeBroadcaster

JobFunction = Callable[[Session, RealtimeBroadcaster | None, datetime], dict[str, Any]]
WindowFunction = Callable[[datetime], str]


@dataclass(frozen=True)
class JobDefinition:
    """A job body with its cron expression and invocation window."""

    name: str
    cron: str
    window: WindowFunction
    func: JobFunction
    description: str = ""

    def idempotency_key(self, now: datetime) -> str:
        return f"{self.name}:{self.window(now)}"


_job_registry: dict[str, JobDefinition] = {}


def register_job(name: str, *, cron: str, window: WindowFunction):
    """Decorator registering ``fn`` as the body of the scheduled job ``name``.

    Usage:
        @register_job("overdue-sweep", cron="0 * * * *", window=hourly_window)
        def check_overdue_tasks(session, broadcaster, now):
            ...
    """

    def decorator(fn: JobFunction) -> JobFunction:
        _job_registry[name] = JobDefinition(
            name=name,
            cron=cron,
            window=window,
            func=fn,
            description=(fn.__doc__ or "").strip().splitlines()[0] if fn.__doc__ else "",
        )
        return fn

    return decorator


def get_job(name: str) -> JobDefinition:
    try:
        return _job_registry[name]
    except KeyError:
        raise LookupError(f"Unknown job: {name}") from None


def registered_jobs() -> list[JobDefinition]:
    return list(_job_registry.values())


__all__ = ["JobDefinition", "get_job", "register_job", "registered_jobs"]
