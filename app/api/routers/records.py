"""
app/api/routers/records.py

Read-only endpoints for typed records.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.dependencies import get_db
from app.schemas.records import RecordPageResponse, RecordResponse
from app.services.errors import RecordNotFoundError
from app.services.record_service import RecordPage, RecordService, get_record_service

router = APIRouter(prefix="/api/data", tags=["records"])


def _page_response(page: RecordPage) -> RecordPageResponse:
    return RecordPageResponse(
        total_items=page.total_items,
        total_pages=page.total_pages,
        current_page=page.current_page,
        records=[RecordResponse.model_validate(row) for row in page.records],
    )


@router.get("", response_model=RecordPageResponse)
def list_records(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=1000),
    db: Session = Depends(get_db),
    record_service: RecordService = Depends(get_record_service),
) -> RecordPageResponse:
    return _page_response(record_service.list_records(db=db, page=page, limit=limit))


@router.get("/file/{file_id}", response_model=RecordPageResponse)
def list_records_by_file(
    file_id: UUID,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=1000),
    db: Session = Depends(get_db),
    record_service: RecordService = Depends(get_record_service),
) -> RecordPageResponse:
    return _page_response(
        record_service.list_by_file(db=db, file_id=file_id, page=page, limit=limit)
    )


@router.get("/{record_id}", response_model=RecordResponse)
def get_record(
    record_id: int,
    db: Session = Depends(get_db),
    record_service: RecordService = Depends(get_record_service),
) -> RecordResponse:
    try:
        record = record_service.get_record(db=db, record_id=record_id)
    except RecordNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Record not found") from exc
    return RecordResponse.model_validate(record)
