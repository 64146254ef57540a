"""
Repository for column mapping declarations.
"""

from __future__ import annotations

import uuid
from collections.abc import Sequence

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from app.domain.ingestion import ColumnMappingLike
from db.models.column_mapping import ColumnMapping


class ColumnMappingRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def create_mapping(self, mapping: ColumnMappingLike) -> ColumnMapping:
        return self.bulk_create([mapping])[0]

    def bulk_create(self, mappings: Sequence[ColumnMappingLike]) -> list[ColumnMapping]:
        created = [
            ColumnMapping(
                csv_column_name=mapping.csv_column_name,
                db_field_name=mapping.db_field_name,
                data_type=mapping.data_type,
            )
            for mapping in mappings
        ]
        self._session.add_all(created)
        self._session.flush()
        for row in created:
            self._session.refresh(row)
        return created

    def get_mapping(self, mapping_id: uuid.UUID) -> ColumnMapping | None:
        return self._session.get(ColumnMapping, mapping_id)

    def list_mappings(self) -> list[ColumnMapping]:
        stmt: Select[tuple[ColumnMapping]] = select(ColumnMapping).order_by(
            ColumnMapping.created_at.asc(),
        )
        return list(self._session.scalars(stmt).all())

    def find_by_ids(self, mapping_ids: Sequence[uuid.UUID]) -> list[ColumnMapping]:
        """
        Return mappings in the order the ids were requested; unknown ids are omitted.
        """

        if not mapping_ids:
            return []
        stmt = select(ColumnMapping).where(ColumnMapping.id.in_(list(mapping_ids)))
        by_id = {row.id: row for row in self._session.scalars(stmt).all()}
        return [by_id[mapping_id] for mapping_id in mapping_ids if mapping_id in by_id]
