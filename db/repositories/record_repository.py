"""
Repository for typed records produced by CSV ingestion.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.field_catalog import TARGET_FIELDS
from app.validators.type_coercion import DataType, resolve_data_type
from db.models.record import RECORD_FIELD_NAMES, Record
from db.repositories.errors import RecordPersistenceError

logger = logging.getLogger(__name__)

# Text columns accept any coerced value; everything else keeps its type.
TEXT_FIELDS = frozenset(
    field.name for field in TARGET_FIELDS if resolve_data_type(field.data_type) is DataType.STRING
)


def _record_kwargs(values: dict[str, Any]) -> dict[str, Any]:
    kwargs: dict[str, Any] = {}
    for name in RECORD_FIELD_NAMES:
        if name not in values:
            continue
        value = values[name]
        if name in TEXT_FIELDS and value is not None and not isinstance(value, str):
            value = value.isoformat() if hasattr(value, "isoformat") else str(value)
        kwargs[name] = value
    return kwargs


class RecordRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def create_record(self, *, file_id: uuid.UUID, values: dict[str, Any]) -> Record:
        """
        Insert and commit one record.

        Each record is its own transaction so one failing row never rolls
        back rows already written.
        """

        record = Record(file_id=file_id, **_record_kwargs(values))
        try:
            self._session.add(record)
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            logger.warning("Record insert failed file_id=%s error=%s", file_id, exc)
            raise RecordPersistenceError(f"Failed to persist record: {exc}") from exc
        return record

    def get_record(self, record_id: int) -> Record | None:
        return self._session.get(Record, record_id)

    def list_records(self, *, page: int = 1, limit: int = 10) -> tuple[list[Record], int]:
        return self._paginate(select(Record), page=page, limit=limit)

    def list_by_file(
        self,
        *,
        file_id: uuid.UUID,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[Record], int]:
        stmt = select(Record).where(Record.file_id == file_id)
        return self._paginate(stmt, page=page, limit=limit)

    def count_by_file(self, file_id: uuid.UUID) -> int:
        stmt = select(func.count()).select_from(Record).where(Record.file_id == file_id)
        return int(self._session.scalar(stmt) or 0)

    def _paginate(
        self,
        stmt: Select[tuple[Record]],
        *,
        page: int,
        limit: int,
    ) -> tuple[list[Record], int]:
        page = max(1, page)
        limit = max(1, limit)
        total = int(
            self._session.scalar(select(func.count()).select_from(stmt.subquery())) or 0
        )
        rows = self._session.scalars(
            stmt.order_by(Record.id.asc()).offset((page - 1) * limit).limit(limit)
        ).all()
        return list(rows), total
