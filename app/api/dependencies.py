"""
app/api/dependencies.py

Shared FastAPI dependencies for request validation and per-app services.
"""

from __future__ import annotations

from collections.abc import Generator

from fastapi import BackgroundTasks, File, HTTPException, Request, UploadFile, status
from sqlalchemy.orm import Session

from app.config import get_csv_ingestion_settings, get_upload_settings
from app.services.file_service import FileService
from app.services.job_coordinator import JobCoordinator
from app.services.task_queue import FastAPIBackgroundTaskExecutor, IngestionTaskExecutor
from db.repositories.storage import LocalFileStorage
from db.repositories.upload_repository import UploadRepository
from db.repositories.validators import is_csv_upload


def get_csv_upload(file: UploadFile = File(...)) -> UploadFile:
    """
    Validate that the uploaded file is a CSV by extension or MIME type.
    """

    if not is_csv_upload(file.filename, file.content_type):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only CSV files are allowed.",
        )

    return file


def get_db(request: Request) -> Generator[Session, None, None]:
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_job_coordinator(request: Request) -> JobCoordinator:
    return request.app.state.job_coordinator


def get_task_executor(request: Request, background_tasks: BackgroundTasks) -> IngestionTaskExecutor:
    """
    The app-wide queue, or this request's background tasks when configured.
    """

    task_queue = getattr(request.app.state, "task_queue", None)
    if task_queue is None:
        return FastAPIBackgroundTaskExecutor(background_tasks)
    return task_queue


def get_file_service(request: Request) -> FileService:
    settings = get_upload_settings()
    upload_repository = UploadRepository(
        session_factory=request.app.state.session_factory,
        storage_backend=LocalFileStorage(settings.storage_dir),
        max_bytes=settings.max_bytes,
    )
    return FileService(
        upload_repository=upload_repository,
        preview_rows=get_csv_ingestion_settings().preview_rows,
    )
