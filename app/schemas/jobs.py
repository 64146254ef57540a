"""
Schemas for ingestion job status endpoints.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field


class IngestionJobStatusResponse(BaseModel):
    job_id: UUID
    status: str
    file_id: UUID
    mapping_ids: list[UUID] = Field(default_factory=list)
    created_at: datetime | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None
    result: dict[str, Any] | None = None
    error: str | None = None


class IngestionStatusListResponse(BaseModel):
    jobs: list[IngestionJobStatusResponse] = Field(default_factory=list)
