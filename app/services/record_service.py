"""
app/services/record_service.py

Read access to typed records.
"""

from __future__ import annotations

import math
import uuid
from dataclasses import dataclass
from functools import lru_cache

from sqlalchemy.orm import Session

from app.services.errors import RecordNotFoundError
from db.models.record import Record
from db.repositories.record_repository import RecordRepository


@dataclass(frozen=True)
class RecordPage:
    records: list[Record]
    total_items: int
    current_page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.limit) if self.limit else 0


class RecordService:
    def list_records(self, *, db: Session, page: int = 1, limit: int = 10) -> RecordPage:
        rows, total = RecordRepository(db).list_records(page=page, limit=limit)
        return RecordPage(records=rows, total_items=total, current_page=page, limit=limit)

    def list_by_file(
        self,
        *,
        db: Session,
        file_id: uuid.UUID,
        page: int = 1,
        limit: int = 10,
    ) -> RecordPage:
        rows, total = RecordRepository(db).list_by_file(file_id=file_id, page=page, limit=limit)
        return RecordPage(records=rows, total_items=total, current_page=page, limit=limit)

    def get_record(self, *, db: Session, record_id: int) -> Record:
        record = RecordRepository(db).get_record(record_id)
        if record is None:
            raise RecordNotFoundError("Record not found")
        return record


@lru_cache(maxsize=1)
def get_record_service() -> RecordService:
    return RecordService()
