"""
app/main.py

FastAPI application factory and process-wide wiring.

``app`` is built lazily on first attribute access so importing this module
does not require a configured database.
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI, HTTPException, Request, status
from sqlalchemy.orm import Session, sessionmaker

from app.config import get_job_queue_settings, get_log_level
from app.schemas.health import HealthResponse
from app.services.job_coordinator import JobCoordinator
from app.services.task_queue import IngestionTaskExecutor, SchedulerTaskQueue

logger = logging.getLogger(__name__)


def _validate_env() -> None:
    """
    Validate required environment variables at startup.

    Runs before any database connection is initialised.
    """

    from db.config import resolve_database_url

    errors: list[str] = []

    try:
        resolve_database_url()
    except RuntimeError as exc:
        errors.append(str(exc))

    queue_backend = os.getenv("JOB_QUEUE_BACKEND", "").strip().lower()
    if queue_backend and queue_backend not in {"scheduler", "background"}:
        errors.append(f"JOB_QUEUE_BACKEND must be scheduler or background, got {queue_backend!r}.")

    if errors:
        raise RuntimeError(
            "Startup validation failed, missing or invalid environment variables:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    logging.basicConfig(
        level=getattr(logging, get_log_level(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _check_db(session_factory: sessionmaker[Session]) -> None:
    """Run SELECT 1. Raises RuntimeError if the DB is unreachable."""
    from db.session import ping

    try:
        ping(session_factory)
    except Exception as exc:
        raise RuntimeError("Database unavailable.") from exc


def _check_schema(session_factory: sessionmaker[Session]) -> None:
    """
    Every table registered on Base.metadata must exist in the database.

    Does NOT auto-migrate.
    """
    from sqlalchemy import inspect as sa_inspect

    import db.models  # noqa: F401  registers all ORM models on Base.metadata
    from db.base import Base

    with session_factory() as session:
        inspector = sa_inspect(session.get_bind())
        actual: set[str] = set(inspector.get_table_names())
    expected: set[str] = set(Base.metadata.tables.keys())
    missing = expected - actual

    if missing:
        logger.critical(
            "Schema mismatch: %d table(s) defined in ORM metadata are absent from "
            "the database: %s. Run 'alembic upgrade head' and restart.",
            len(missing),
            ", ".join(sorted(missing)),
        )
        raise RuntimeError(
            f"Schema mismatch: {len(missing)} table(s) missing from the database "
            f"({', '.join(sorted(missing))}). Run migrations and restart."
        )


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Validate DB connectivity and schema, start the worker pool on boot; stop it on exit."""
    session_factory = application.state.session_factory
    _check_db(session_factory)
    logger.info("Database connectivity confirmed")
    _check_schema(session_factory)
    logger.info("Database schema validated")

    worker_pool: SchedulerTaskQueue | None = application.state.worker_pool
    if worker_pool is not None:
        worker_pool.start()
    try:
        yield
    finally:
        if worker_pool is not None:
            worker_pool.shutdown(wait=True)


def create_app(
    *,
    session_factory: sessionmaker[Session] | None = None,
    executor: IngestionTaskExecutor | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    ``session_factory`` and ``executor`` replace the configured database and
    job queue; without an executor the queue backend comes from settings.
    """

    _configure_logging()
    if session_factory is None:
        _validate_env()
        from db.session import get_session_factory

        session_factory = get_session_factory()

    worker_pool: SchedulerTaskQueue | None = None
    if executor is None:
        queue_settings = get_job_queue_settings()
        if queue_settings.backend == "scheduler":
            worker_pool = SchedulerTaskQueue(worker_count=queue_settings.worker_count)
            executor = worker_pool

    application = FastAPI(
        title="CSV Field Mapper API",
        version="1.0.0",
        lifespan=_lifespan,
    )
    application.state.session_factory = session_factory
    application.state.worker_pool = worker_pool
    # None means per-request FastAPI background tasks.
    application.state.task_queue = executor
    application.state.job_coordinator = JobCoordinator(
        session_factory=session_factory,
        executor=executor,
    )

    from app.api.routers import files_router, mappings_router, records_router

    application.include_router(files_router)
    application.include_router(mappings_router)
    application.include_router(records_router)

    @application.get("/health", response_model=HealthResponse)
    def healthcheck(request: Request) -> HealthResponse:
        try:
            _check_db(request.app.state.session_factory)
        except RuntimeError as exc:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Database unavailable.",
            ) from exc
        return HealthResponse(status="ok", database="ok")

    return application


_app: FastAPI | None = None


def __getattr__(name: str) -> object:
    # Lazy `from app.main import app` / `uvicorn app.main:app`.
    global _app
    if name == "app":
        if _app is None:
            _app = create_app()
        return _app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
