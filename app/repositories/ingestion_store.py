"""
app/repositories/ingestion_store.py

Persistence contract used by the ingestion pipeline and its SQLAlchemy
implementation.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence
from typing import Protocol

from sqlalchemy.orm import Session

from app.domain.ingestion import TypedRecord
from db.models.column_mapping import ColumnMapping
from db.models.source_file import SourceFile
from db.repositories.column_mapping_repository import ColumnMappingRepository
from db.repositories.record_repository import RecordRepository
from db.repositories.source_file_repository import SourceFileRepository


class IngestionStore(Protocol):
    """
    What the pipeline and job coordinator need from storage.

    ``create_record`` raises ``RecordPersistenceError`` when a row cannot be
    written; the pipeline treats that as a row failure.
    """

    def create_record(self, record: TypedRecord) -> None:
        ...

    def update_file_status(self, file_id: uuid.UUID, status: str) -> None:
        ...

    def find_mappings_by_ids(self, mapping_ids: Sequence[uuid.UUID]) -> list[ColumnMapping]:
        ...

    def find_file_by_id(self, file_id: uuid.UUID) -> SourceFile | None:
        ...


class SqlAlchemyIngestionStore:
    """
    ``IngestionStore`` over one SQLAlchemy session.

    Records and status changes are committed immediately so pollers see
    progress while a run is still going.
    """

    def __init__(self, session: Session) -> None:
        self._session = session
        self._files = SourceFileRepository(session)
        self._mappings = ColumnMappingRepository(session)
        self._records = RecordRepository(session)

    def create_record(self, record: TypedRecord) -> None:
        self._records.create_record(file_id=record.file_id, values=record.values)

    def update_file_status(self, file_id: uuid.UUID, status: str) -> None:
        self._files.update_status(file_id=file_id, status=status)
        self._session.commit()

    def find_mappings_by_ids(self, mapping_ids: Sequence[uuid.UUID]) -> list[ColumnMapping]:
        return self._mappings.find_by_ids(mapping_ids)

    def find_file_by_id(self, file_id: uuid.UUID) -> SourceFile | None:
        return self._files.get_file(file_id)
