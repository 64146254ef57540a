"""
app/api/routers/files.py

File upload, preview and processing endpoints.
"""

from __future__ import annotations

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response, UploadFile, status
from sqlalchemy.orm import Session

from app.api.dependencies import (
    get_csv_upload,
    get_db,
    get_file_service,
    get_job_coordinator,
    get_task_executor,
)
from app.config import get_upload_settings
from app.domain.ingestion import JobSnapshot
from app.parsers.csv_stream import SourceUnavailableError
from app.schemas.files import (
    FilePreviewResponse,
    FileUploadResponse,
    ProcessFileRequest,
    ProcessFileResponse,
    ProcessingResultResponse,
    ProcessQueuedResponse,
    RowErrorResponse,
    SourceFileResponse,
)
from app.schemas.jobs import IngestionJobStatusResponse, IngestionStatusListResponse
from app.services.errors import MappingNotFoundError, SourceFileNotFoundError
from app.services.file_service import FileService
from app.services.job_coordinator import JobCoordinator, JobSchedulingError
from app.services.processing_service import ProcessingService, get_processing_service
from app.services.task_queue import IngestionTaskExecutor
from db.repositories.errors import (
    FileStorageError,
    SourceFilePersistenceError,
    UploadValidationError,
)
from db.repositories.types import UploadFileInput

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/files", tags=["files"])


def _job_response(snapshot: JobSnapshot) -> IngestionJobStatusResponse:
    return IngestionJobStatusResponse(
        job_id=snapshot.id,
        status=snapshot.status,
        file_id=snapshot.file_id,
        mapping_ids=snapshot.mapping_ids,
        created_at=snapshot.created_at,
        started_at=snapshot.started_at,
        completed_at=snapshot.completed_at,
        result=snapshot.result,
        error=snapshot.error,
    )


@router.post("/upload", status_code=status.HTTP_201_CREATED, response_model=FileUploadResponse)
def upload_file(
    file: UploadFile = Depends(get_csv_upload),
    file_service: FileService = Depends(get_file_service),
) -> FileUploadResponse:
    """
    Store one CSV file for later preview and processing.
    """

    max_bytes = get_upload_settings().max_bytes
    try:
        # One byte past the limit is enough to reject oversized uploads.
        content = file.file.read(max_bytes + 1)
        source_file = file_service.upload(
            UploadFileInput(
                file_name=file.filename or "upload.csv",
                content=content,
                content_type=file.content_type,
            )
        )
    except UploadValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except (FileStorageError, SourceFilePersistenceError) as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to store uploaded file.",
        ) from exc
    finally:
        file.file.close()

    return FileUploadResponse(
        message="File uploaded successfully",
        file=SourceFileResponse.model_validate(source_file),
    )


@router.get("", response_model=list[SourceFileResponse])
def list_files(
    db: Session = Depends(get_db),
    file_service: FileService = Depends(get_file_service),
) -> list[SourceFileResponse]:
    return [SourceFileResponse.model_validate(row) for row in file_service.list_files(db=db)]


@router.get("/jobs", response_model=IngestionStatusListResponse)
def list_jobs(
    status_filter: str | None = Query(default=None, alias="status", description="Optional status filter"),
    limit: int = Query(default=100, ge=1, le=500, description="Max jobs returned"),
    coordinator: JobCoordinator = Depends(get_job_coordinator),
) -> IngestionStatusListResponse:
    snapshots = coordinator.list_jobs(limit=limit, status=status_filter)
    return IngestionStatusListResponse(jobs=[_job_response(snapshot) for snapshot in snapshots])


@router.get("/job/{job_id}", response_model=IngestionJobStatusResponse)
def get_job_status(
    job_id: UUID,
    coordinator: JobCoordinator = Depends(get_job_coordinator),
) -> IngestionJobStatusResponse:
    snapshot = coordinator.status(job_id)
    if snapshot is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")
    return _job_response(snapshot)


@router.get("/preview/{file_id}", response_model=FilePreviewResponse)
def preview_file(
    file_id: UUID,
    db: Session = Depends(get_db),
    file_service: FileService = Depends(get_file_service),
) -> FilePreviewResponse:
    try:
        file_preview = file_service.preview(db=db, file_id=file_id)
    except SourceFileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found") from exc
    except SourceUnavailableError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Unable to read CSV file: {exc.reason}",
        ) from exc

    return FilePreviewResponse(
        file_id=file_preview.source_file.id,
        file_name=file_preview.source_file.file_name,
        headers=file_preview.headers,
        preview_data=file_preview.rows,
    )


@router.post(
    "/process",
    response_model=ProcessFileResponse | ProcessQueuedResponse,
    responses={status.HTTP_202_ACCEPTED: {"model": ProcessQueuedResponse}},
)
def process_file(
    payload: ProcessFileRequest,
    response: Response,
    db: Session = Depends(get_db),
    file_service: FileService = Depends(get_file_service),
    processing_service: ProcessingService = Depends(get_processing_service),
    coordinator: JobCoordinator = Depends(get_job_coordinator),
    executor: IngestionTaskExecutor = Depends(get_task_executor),
) -> ProcessFileResponse | ProcessQueuedResponse:
    """
    Apply mappings to a stored file, inline or through the job queue.
    """

    try:
        source_file = file_service.get_file(db=db, file_id=payload.file_id)
    except SourceFileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found") from exc

    if payload.use_queue:
        try:
            snapshot = coordinator.enqueue(payload.file_id, payload.mapping_ids, executor=executor)
        except JobSchedulingError as exc:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail=f"Processing queue unavailable; job {exc.job_id} was not scheduled.",
            ) from exc
        response.status_code = status.HTTP_202_ACCEPTED
        return ProcessQueuedResponse(
            message="File processing has been queued",
            job_id=snapshot.id,
            file=SourceFileResponse.model_validate(source_file),
        )

    try:
        result = processing_service.process_file(
            db=db,
            file_id=payload.file_id,
            mapping_ids=payload.mapping_ids,
        )
    except (SourceFileNotFoundError, MappingNotFoundError) as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except SourceUnavailableError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Unable to read CSV file: {exc.reason}",
        ) from exc

    db.refresh(source_file)
    return ProcessFileResponse(
        message="File processed successfully",
        file=SourceFileResponse.model_validate(source_file),
        results=ProcessingResultResponse(
            total=result.total,
            processed=result.processed,
            failed=result.failed,
            errors=[RowErrorResponse(row=error.row, error=error.error) for error in result.errors],
        ),
    )


@router.get("/{file_id}", response_model=SourceFileResponse)
def get_file(
    file_id: UUID,
    db: Session = Depends(get_db),
    file_service: FileService = Depends(get_file_service),
) -> SourceFileResponse:
    try:
        source_file = file_service.get_file(db=db, file_id=file_id)
    except SourceFileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found") from exc
    return SourceFileResponse.model_validate(source_file)
