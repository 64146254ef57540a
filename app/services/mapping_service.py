"""
app/services/mapping_service.py

Column mapping management: creation with field validation, lookup,
the field catalog and header-based suggestions.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from functools import lru_cache

from sqlalchemy.orm import Session

from app.domain.field_catalog import TargetField, get_available_fields
from app.domain.ingestion import MappingSpec, SuggestedMapping
from app.mappers.schema_mapper import SchemaMapper
from app.parsers.csv_stream import read_headers
from app.services.errors import MappingNotFoundError, SourceFileNotFoundError
from app.validators.mapping_validator import MappingValidator, SchemaMappingError
from db.models.column_mapping import ColumnMapping
from db.models.source_file import SourceFile
from db.repositories.column_mapping_repository import ColumnMappingRepository
from db.repositories.source_file_repository import SourceFileRepository

logger = logging.getLogger(__name__)


class MappingService:
    def __init__(
        self,
        *,
        validator: MappingValidator | None = None,
        mapper: SchemaMapper | None = None,
    ) -> None:
        self._validator = validator or MappingValidator()
        self._mapper = mapper or SchemaMapper()

    def available_fields(self) -> tuple[TargetField, ...]:
        return get_available_fields()

    def create_mapping(self, *, db: Session, mapping: MappingSpec) -> ColumnMapping:
        return self.create_mappings(db=db, mappings=[mapping])[0]

    def create_mappings(
        self,
        *,
        db: Session,
        mappings: Sequence[MappingSpec],
    ) -> list[ColumnMapping]:
        """
        Validate every mapping first; nothing is written if any field is unknown.

        Raises:
            InvalidFieldError: a ``db_field_name`` is not in the field catalog.
        """

        try:
            self._validator.validate(mappings)
        except SchemaMappingError as exc:
            logger.error("Error creating mappings: %s", exc)
            raise

        created = ColumnMappingRepository(db).bulk_create(mappings)
        db.commit()
        logger.info("Created column mappings count=%d", len(created))
        return created

    def list_mappings(self, *, db: Session) -> list[ColumnMapping]:
        return ColumnMappingRepository(db).list_mappings()

    def get_mapping(self, *, db: Session, mapping_id: uuid.UUID) -> ColumnMapping:
        mapping = ColumnMappingRepository(db).get_mapping(mapping_id)
        if mapping is None:
            raise MappingNotFoundError("Mapping not found")
        return mapping

    def suggest_for_file(
        self,
        *,
        db: Session,
        file_id: uuid.UUID,
    ) -> tuple[SourceFile, list[SuggestedMapping]]:
        """
        Suggest a mapping for each header of a stored file.

        Raises:
            SourceFileNotFoundError: unknown file id.
            SourceUnavailableError: the stored CSV could not be read.
        """

        source_file = SourceFileRepository(db).get_file(file_id)
        if source_file is None:
            raise SourceFileNotFoundError(file_id)
        headers = read_headers(source_file.file_path)
        return source_file, self._mapper.suggest(headers)


@lru_cache(maxsize=1)
def get_mapping_service() -> MappingService:
    return MappingService()
