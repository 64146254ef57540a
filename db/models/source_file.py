"""
db/models/source_file.py

Uploaded CSV file awaiting or undergoing transformation.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Index, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base

if TYPE_CHECKING:
    from db.models.record import Record


class SourceFileStatus:
    """Valid lifecycle states for a source file."""

    UPLOADED = "uploaded"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


class SourceFile(Base):
    __tablename__ = "source_files"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    file_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Original client-side file name",
    )
    file_path: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        comment="Absolute or storage-root-relative path of the stored CSV",
    )
    status: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default=SourceFileStatus.UPLOADED,
        comment="uploaded → processing → completed | error",
    )
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    records: Mapped[list["Record"]] = relationship(
        back_populates="source_file",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("ix_source_files_status", "status"),
        Index("ix_source_files_uploaded_at", "uploaded_at"),
    )
