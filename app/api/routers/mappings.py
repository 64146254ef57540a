"""
app/api/routers/mappings.py

Column mapping endpoints.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.dependencies import get_db
from app.domain.ingestion import MappingSpec
from app.parsers.csv_stream import SourceUnavailableError
from app.schemas.mappings import (
    ColumnMappingBulkCreate,
    ColumnMappingCreate,
    ColumnMappingResponse,
    MappingSuggestionResponse,
    MappingSuggestionsResponse,
    TargetFieldResponse,
)
from app.services.errors import MappingNotFoundError, SourceFileNotFoundError
from app.services.mapping_service import MappingService, get_mapping_service
from app.validators.mapping_validator import SchemaMappingError

router = APIRouter(prefix="/api/mappings", tags=["mappings"])


def _to_spec(payload: ColumnMappingCreate) -> MappingSpec:
    return MappingSpec(
        csv_column_name=payload.csv_column_name,
        db_field_name=payload.db_field_name,
        data_type=payload.data_type,
    )


@router.get("", response_model=list[ColumnMappingResponse])
def list_mappings(
    db: Session = Depends(get_db),
    mapping_service: MappingService = Depends(get_mapping_service),
) -> list[ColumnMappingResponse]:
    return [
        ColumnMappingResponse.model_validate(row)
        for row in mapping_service.list_mappings(db=db)
    ]


@router.get("/fields/available", response_model=list[TargetFieldResponse])
def list_available_fields(
    mapping_service: MappingService = Depends(get_mapping_service),
) -> list[TargetFieldResponse]:
    return [
        TargetFieldResponse(name=field.name, type=field.data_type)
        for field in mapping_service.available_fields()
    ]


@router.get("/suggestions/{file_id}", response_model=MappingSuggestionsResponse)
def get_suggestions(
    file_id: UUID,
    db: Session = Depends(get_db),
    mapping_service: MappingService = Depends(get_mapping_service),
) -> MappingSuggestionsResponse:
    try:
        source_file, suggestions = mapping_service.suggest_for_file(db=db, file_id=file_id)
    except SourceFileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found") from exc
    except SourceUnavailableError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Unable to read CSV file: {exc.reason}",
        ) from exc

    return MappingSuggestionsResponse(
        file_id=source_file.id,
        file_name=source_file.file_name,
        suggestions=[
            MappingSuggestionResponse(
                csv_column_name=suggestion.csv_column_name,
                db_field_name=suggestion.db_field_name,
                data_type=suggestion.data_type,
            )
            for suggestion in suggestions
        ],
    )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ColumnMappingResponse)
def create_mapping(
    payload: ColumnMappingCreate,
    db: Session = Depends(get_db),
    mapping_service: MappingService = Depends(get_mapping_service),
) -> ColumnMappingResponse:
    try:
        mapping = mapping_service.create_mapping(db=db, mapping=_to_spec(payload))
    except SchemaMappingError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.to_dict()) from exc
    return ColumnMappingResponse.model_validate(mapping)


@router.post("/bulk", status_code=status.HTTP_201_CREATED, response_model=list[ColumnMappingResponse])
def create_mappings(
    payload: ColumnMappingBulkCreate,
    db: Session = Depends(get_db),
    mapping_service: MappingService = Depends(get_mapping_service),
) -> list[ColumnMappingResponse]:
    try:
        created = mapping_service.create_mappings(
            db=db,
            mappings=[_to_spec(item) for item in payload.mappings],
        )
    except SchemaMappingError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.to_dict()) from exc
    return [ColumnMappingResponse.model_validate(row) for row in created]


@router.get("/{mapping_id}", response_model=ColumnMappingResponse)
def get_mapping(
    mapping_id: UUID,
    db: Session = Depends(get_db),
    mapping_service: MappingService = Depends(get_mapping_service),
) -> ColumnMappingResponse:
    try:
        mapping = mapping_service.get_mapping(db=db, mapping_id=mapping_id)
    except MappingNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return ColumnMappingResponse.model_validate(mapping)
