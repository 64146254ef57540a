"""
app/schemas/files.py

Request and response schemas for file upload, preview and processing.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class SourceFileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    file_name: str
    status: str
    uploaded_at: datetime | None = None


class FileUploadResponse(BaseModel):
    message: str
    file: SourceFileResponse


class FilePreviewResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file_id: UUID = Field(..., alias="fileId")
    file_name: str = Field(..., alias="fileName")
    headers: list[str] = Field(default_factory=list)
    preview_data: list[dict[str, Any]] = Field(default_factory=list, alias="previewData")


class ProcessFileRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    file_id: UUID = Field(..., alias="fileId")
    mapping_ids: list[UUID] = Field(..., alias="mappingIds", min_length=1)
    use_queue: bool = Field(default=False, alias="useQueue")


class RowErrorResponse(BaseModel):
    row: int = Field(..., ge=1)
    error: str


class ProcessingResultResponse(BaseModel):
    total: int = Field(..., ge=0)
    processed: int = Field(..., ge=0)
    failed: int = Field(..., ge=0)
    errors: list[RowErrorResponse] = Field(default_factory=list)


class ProcessFileResponse(BaseModel):
    message: str
    file: SourceFileResponse
    results: ProcessingResultResponse


class ProcessQueuedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    job_id: UUID = Field(..., alias="jobId")
    file: SourceFileResponse
