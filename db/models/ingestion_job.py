"""
db/models/ingestion_job.py

Ingestion job model for queued processing lifecycle tracking.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, JSONDocument, TimestampMixin


class IngestionJobStatus:
    QUEUED = "queued"
    ACTIVE = "active"
    COMPLETED = "completed"
    FAILED = "failed"


# Allowed forward transitions; terminal states have none.
JOB_TRANSITIONS: dict[str, frozenset[str]] = {
    IngestionJobStatus.QUEUED: frozenset({IngestionJobStatus.ACTIVE, IngestionJobStatus.FAILED}),
    IngestionJobStatus.ACTIVE: frozenset({IngestionJobStatus.COMPLETED, IngestionJobStatus.FAILED}),
    IngestionJobStatus.COMPLETED: frozenset(),
    IngestionJobStatus.FAILED: frozenset(),
}


class IngestionJob(Base, TimestampMixin):
    __tablename__ = "ingestion_jobs"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    status: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default=IngestionJobStatus.QUEUED,
    )
    file_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        nullable=False,
        comment="Source file to process; not a foreign key so jobs outlive files",
    )
    mapping_ids: Mapped[list[str]] = mapped_column(
        JSONDocument,
        nullable=False,
        comment="Ordered column mapping ids applied by the run",
    )
    result_payload: Mapped[dict[str, Any] | None] = mapped_column(
        JSONDocument,
        nullable=True,
        comment="Processing result once completed",
    )
    error_message: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    started_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    __table_args__ = (
        Index("ix_ingestion_jobs_status", "status"),
        Index("ix_ingestion_jobs_file_id", "file_id"),
        Index("ix_ingestion_jobs_created_at", "created_at"),
    )
