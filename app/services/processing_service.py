"""
app/services/processing_service.py

Inline (request-blocking) CSV processing.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from functools import lru_cache

from sqlalchemy.orm import Session

from app.domain.ingestion import ProcessingResult
from app.repositories.ingestion_store import SqlAlchemyIngestionStore
from app.services.errors import MappingNotFoundError, SourceFileNotFoundError
from app.services.job_coordinator import PipelineFactory
from app.services.ingestion_pipeline import IngestionPipeline

logger = logging.getLogger(__name__)


class ProcessingService:
    """
    Runs the ingestion pipeline on the caller's session and returns the result.
    """

    def __init__(self, *, pipeline_factory: PipelineFactory | None = None) -> None:
        self._pipeline_factory = pipeline_factory or IngestionPipeline.from_settings

    def process_file(
        self,
        *,
        db: Session,
        file_id: uuid.UUID,
        mapping_ids: Sequence[uuid.UUID],
    ) -> ProcessingResult:
        """
        Raises:
            SourceFileNotFoundError: unknown file id.
            MappingNotFoundError: none of the mapping ids exist.
            SourceUnavailableError: the stored CSV could not be read.
        """

        store = SqlAlchemyIngestionStore(db)
        source_file = store.find_file_by_id(file_id)
        if source_file is None:
            raise SourceFileNotFoundError(file_id)

        mappings = store.find_mappings_by_ids(mapping_ids)
        if not mappings:
            raise MappingNotFoundError("No mappings found with the provided IDs")

        logger.info("Processing file inline file_id=%s mappings=%d", file_id, len(mappings))
        return self._pipeline_factory(store).run(source_file, mappings)


@lru_cache(maxsize=1)
def get_processing_service() -> ProcessingService:
    return ProcessingService()
