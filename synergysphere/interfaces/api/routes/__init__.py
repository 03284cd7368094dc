from fastapi import FastAPI

from .auth import router as auth_router
from .github import router as github_router
from .health import router as health_router
from .integrations import router as integrations_router
from .jobs import router as jobs_router
from .meetings import router as meetings_router
from .notifications import router as notifications_router
from .reports import router as reports_router
from .tasks import router as tasks_router
from .ws import router as ws_router

API_PREFIX = "/api"


def register_routes(app: FastAPI) -> None:
    """Register every API router on the FastAPI application."""

    app.include_router(health_router, prefix=API_PREFIX)
    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(tasks_router, prefix=API_PREFIX)
    app.include_router(meetings_router, prefix=API_PREFIX)
    app.include_router(notifications_router, prefix=API_PREFIX)
    app.include_router(reports_router, prefix=API_PREFIX)
    app.include_router(jobs_router, prefix=API_PREFIX)
    app.include_router(github_router, prefix=API_PREFIX)
    app.include_router(integrations_router, prefix=API_PREFIX)
    app.include_router(ws_router, prefix=API_PREFIX)
