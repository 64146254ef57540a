"""
db/models/column_mapping.py

Persistent CSV column -> record field declarations. Rows are never updated.
"""

from __future__ import annotations

import uuid

from sqlalchemy import Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, CreatedAtMixin


class ColumnMapping(Base, CreatedAtMixin):
    __tablename__ = "column_mappings"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )
    csv_column_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Source CSV header",
    )
    db_field_name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Target record field from the field catalog",
    )
    data_type: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        comment="Type tag, e.g. string, integer, decimal, boolean, date",
    )

    __table_args__ = (
        Index("ix_column_mappings_db_field_name", "db_field_name"),
        Index("ix_column_mappings_created_at", "created_at"),
    )
