"""
db/models/record.py

Typed record produced from one CSV row. One nullable column per catalog field.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base, CreatedAtMixin

if TYPE_CHECKING:
    from db.models.source_file import SourceFile

RECORD_FIELD_NAMES: tuple[str, ...] = (
    "brand",
    "description",
    "price",
    "size",
    "volume",
    "classification",
    "purchase_price",
    "vendor_number",
    "vendor_name",
)


class Record(Base, CreatedAtMixin):
    __tablename__ = "records"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    file_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("source_files.id", ondelete="CASCADE"),
        nullable=True,
    )

    brand: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[float | None] = mapped_column(Numeric(asdecimal=False), nullable=True)
    size: Mapped[str | None] = mapped_column(String(100), nullable=True)
    volume: Mapped[float | None] = mapped_column(Numeric(asdecimal=False), nullable=True)
    classification: Mapped[str | None] = mapped_column(String(100), nullable=True)
    purchase_price: Mapped[float | None] = mapped_column(Numeric(asdecimal=False), nullable=True)
    vendor_number: Mapped[int | None] = mapped_column(Integer, nullable=True)
    vendor_name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    source_file: Mapped["SourceFile"] = relationship(back_populates="records")

    __table_args__ = (
        Index("ix_records_file_id", "file_id"),
    )
