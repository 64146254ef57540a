"""
app/schemas/records.py

Response schemas for typed record endpoints.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class RecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    file_id: UUID | None = None
    brand: str | None = None
    description: str | None = None
    price: float | None = None
    size: str | None = None
    volume: float | None = None
    classification: str | None = None
    purchase_price: float | None = None
    vendor_number: int | None = None
    vendor_name: str | None = None
    created_at: datetime | None = None


class RecordPageResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_items: int = Field(..., alias="totalItems", ge=0)
    total_pages: int = Field(..., alias="totalPages", ge=0)
    current_page: int = Field(..., alias="currentPage", ge=1)
    records: list[RecordResponse] = Field(default_factory=list)
