"""
app/schemas/mappings.py

Schemas for column mapping endpoints.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ColumnMappingCreate(BaseModel):
    csv_column_name: str = Field(..., min_length=1)
    db_field_name: str = Field(..., min_length=1)
    data_type: str = Field(..., min_length=1)


class ColumnMappingBulkCreate(BaseModel):
    mappings: list[ColumnMappingCreate] = Field(..., min_length=1)


class ColumnMappingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    csv_column_name: str
    db_field_name: str
    data_type: str
    created_at: datetime | None = None


class TargetFieldResponse(BaseModel):
    name: str
    type: str


class MappingSuggestionResponse(BaseModel):
    csv_column_name: str
    db_field_name: str | None = None
    data_type: str | None = None


class MappingSuggestionsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file_id: UUID = Field(..., alias="fileId")
    file_name: str = Field(..., alias="fileName")
    suggestions: list[MappingSuggestionResponse] = Field(default_factory=list)
