"""
app/services/ingestion_pipeline.py

Row-by-row CSV ingestion: read, coerce, persist, account.

A run moves the source file through processing -> completed, or to error
when the file itself cannot be read. Individual rows that fail are counted
and reported but never stop the run.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from app.config import get_csv_ingestion_settings
from app.domain.ingestion import (
    CoercionIssue,
    ColumnMappingLike,
    ProcessingResult,
    RowError,
    SourceFileLike,
    TypedRecord,
)
from app.mappers.schema_mapper import SchemaMapper
from app.parsers.csv_stream import SourceUnavailableError, iter_rows
from app.repositories.ingestion_store import IngestionStore
from db.models.source_file import SourceFileStatus
from db.repositories.errors import RecordPersistenceError

logger = logging.getLogger(__name__)


class IngestionPipeline:
    """
    Applies a mapping set to every row of one stored CSV file.
    """

    def __init__(
        self,
        store: IngestionStore,
        *,
        mapper: SchemaMapper | None = None,
        log_row_errors: bool = True,
    ) -> None:
        self._store = store
        self._mapper = mapper or SchemaMapper()
        self._log_row_errors = log_row_errors

    @classmethod
    def from_settings(cls, store: IngestionStore) -> "IngestionPipeline":
        settings = get_csv_ingestion_settings()
        return cls(
            store,
            log_row_errors=settings.log_row_errors,
        )

    def run(
        self,
        source_file: SourceFileLike,
        mappings: Sequence[ColumnMappingLike],
    ) -> ProcessingResult:
        """
        Process every data row of ``source_file``.

        Raises:
            SourceUnavailableError: the file could not be opened or read. The
                file is marked ``error`` and rows already written stay.
        """

        file_id = source_file.id
        self._store.update_file_status(file_id, SourceFileStatus.PROCESSING)
        logger.info(
            "CSV ingestion started file_id=%s path=%s mappings=%d",
            file_id,
            source_file.file_path,
            len(mappings),
        )

        total = 0
        processed = 0
        failed = 0
        errors: list[RowError] = []

        try:
            column_map = self._mapper.build_column_map(mappings)

            for row in iter_rows(source_file.file_path):
                total += 1
                if row.error is not None:
                    failed += 1
                    self._record_error(errors, RowError(row=row.row_number, error=row.error))
                    continue

                try:
                    mapped = self._mapper.map_row(raw_row=row.values, column_map=column_map)
                    self._log_issues(row.row_number, mapped.issues)
                    self._store.create_record(TypedRecord(file_id=file_id, values=mapped.values))
                except RecordPersistenceError as exc:
                    failed += 1
                    self._record_error(errors, RowError(row=row.row_number, error=str(exc)))
                    continue
                except Exception as exc:  # noqa: BLE001
                    failed += 1
                    self._record_error(
                        errors,
                        RowError(row=row.row_number, error=f"{type(exc).__name__}: {exc}"),
                    )
                    continue

                processed += 1
        except SourceUnavailableError:
            logger.exception("CSV source unavailable file_id=%s", file_id)
            self._mark_error(file_id)
            raise
        except Exception:
            logger.exception("CSV ingestion aborted file_id=%s", file_id)
            self._mark_error(file_id)
            raise

        self._store.update_file_status(file_id, SourceFileStatus.COMPLETED)
        result = ProcessingResult(total=total, processed=processed, failed=failed, errors=errors)
        logger.info(
            "CSV ingestion finished file_id=%s total=%d processed=%d failed=%d",
            file_id,
            total,
            processed,
            failed,
        )
        return result

    def _mark_error(self, file_id: object) -> None:
        try:
            self._store.update_file_status(file_id, SourceFileStatus.ERROR)
        except Exception:  # noqa: BLE001
            logger.exception("Failed to mark file as error file_id=%s", file_id)

    def _record_error(self, errors: list[RowError], error: RowError) -> None:
        if self._log_row_errors:
            logger.warning("CSV row failed row=%s error=%s", error.row, error.error)

        errors.append(error)

    def _log_issues(self, row_number: int, issues: Sequence[CoercionIssue]) -> None:
        if not self._log_row_errors:
            return
        for issue in issues:
            logger.warning(
                "CSV coercion failed row=%s column=%s field=%s type=%s value=%r",
                row_number,
                issue.column,
                issue.field_name,
                issue.data_type,
                issue.value,
            )
