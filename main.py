import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from synergysphere.application.use_cases.jobs import JobRunner, create_scheduler
from synergysphere.config import get_settings
from synergysphere.infrastructure.database import SessionLocal, engine, initialize_database
from synergysphere.infrastructure.realtime import ConnectionRegistry, RealtimeBroadcaster
from synergysphere.interfaces.api.routes import register_routes

logger = logging.getLogger("synergysphere")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the tables, start the scheduler and release resources on shutdown."""

    initialize_database()
    scheduler = None
    if get_settings().scheduler_enabled:
        scheduler = create_scheduler(app.state.job_runner)
        scheduler.start()
        logger.info("Scheduler started")
    try:
        yield
    finally:
        if scheduler is not None:
            scheduler.shutdown(wait=False)
        engine.dispose()


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="SynergySphere API", lifespan=lifespan)

    registry = ConnectionRegistry()
    broadcaster = RealtimeBroadcaster(registry)
    app.state.registry = registry
    app.state.broadcaster = broadcaster
    app.state.job_runner = JobRunner(SessionLocal, broadcaster)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})

    register_routes(app)
    return app


app = create_app()
