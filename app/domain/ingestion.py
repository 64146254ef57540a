"""
app/domain/ingestion.py

Domain models used by the CSV mapping and ingestion flow.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol


class ColumnMappingLike(Protocol):
    """
    Anything carrying one column-to-field declaration.

    Satisfied by ``MappingSpec`` and by the ``ColumnMapping`` ORM model.
    """

    csv_column_name: str
    db_field_name: str
    data_type: str


@dataclass(frozen=True)
class MappingSpec:
    """
    Candidate mapping submitted by the operator, not yet persisted.
    """

    csv_column_name: str
    db_field_name: str
    data_type: str


@dataclass(frozen=True)
class SuggestedMapping:
    """
    Best-effort mapping proposal for one CSV header.

    ``db_field_name`` and ``data_type`` are None when nothing matched.
    """

    csv_column_name: str
    db_field_name: str | None
    data_type: str | None


@dataclass(frozen=True)
class CoercionIssue:
    """
    A cell that was supplied but could not be coerced; stored as null.
    """

    column: str
    field_name: str
    data_type: str
    value: str | None


@dataclass(frozen=True)
class TypedRecord:
    """
    One row's coerced output, ready for persistence.
    """

    file_id: uuid.UUID
    values: dict[str, Any]


@dataclass(frozen=True)
class RowError:
    """
    Row-scoped failure detail.
    """

    row: int
    error: str


@dataclass(frozen=True)
class ProcessingResult:
    """
    End-of-run ingestion summary.
    """

    total: int
    processed: int
    failed: int
    errors: list[RowError] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "processed": self.processed,
            "failed": self.failed,
            "errors": [{"row": error.row, "error": error.error} for error in self.errors],
        }


@dataclass(frozen=True)
class JobSnapshot:
    """
    Read-only view of an ingestion job at lookup time.
    """

    id: uuid.UUID
    status: str
    file_id: uuid.UUID
    mapping_ids: list[uuid.UUID]
    created_at: datetime | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None
    result: dict[str, Any] | None = None
    error: str | None = None


class SourceFileLike(Protocol):
    """
    The parts of a stored file the pipeline needs.
    """

    id: uuid.UUID
    file_path: str
