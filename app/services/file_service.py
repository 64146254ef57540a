"""
app/services/file_service.py

Uploaded file intake, listing and preview.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any

from sqlalchemy.orm import Session

from app.parsers.csv_stream import DEFAULT_PREVIEW_ROWS, preview, read_headers
from app.services.errors import SourceFileNotFoundError
from db.models.source_file import SourceFile
from db.repositories.source_file_repository import SourceFileRepository
from db.repositories.types import UploadFileInput
from db.repositories.upload_repository import UploadRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilePreview:
    source_file: SourceFile
    headers: list[str]
    rows: list[dict[str, Any]]


class FileService:
    def __init__(
        self,
        *,
        upload_repository: UploadRepository,
        preview_rows: int = DEFAULT_PREVIEW_ROWS,
    ) -> None:
        self._upload_repository = upload_repository
        self._preview_rows = preview_rows

    def upload(self, payload: UploadFileInput) -> SourceFile:
        """
        Store an uploaded CSV and register it with status ``uploaded``.

        Raises:
            UploadValidationError: not a CSV, empty, or over the size limit.
            FileStorageError: the file could not be written.
        """

        return self._upload_repository.store_upload(payload)

    def list_files(self, *, db: Session) -> list[SourceFile]:
        return SourceFileRepository(db).list_files()

    def get_file(self, *, db: Session, file_id: uuid.UUID) -> SourceFile:
        source_file = SourceFileRepository(db).get_file(file_id)
        if source_file is None:
            raise SourceFileNotFoundError(file_id)
        return source_file

    def preview(self, *, db: Session, file_id: uuid.UUID) -> FilePreview:
        """
        Raises:
            SourceFileNotFoundError: unknown file id.
            SourceUnavailableError: the stored CSV could not be read.
        """

        source_file = self.get_file(db=db, file_id=file_id)
        headers = read_headers(source_file.file_path)
        rows = preview(source_file.file_path, self._preview_rows)
        logger.debug("Previewed file_id=%s rows=%d", file_id, len(rows))
        return FilePreview(source_file=source_file, headers=headers, rows=rows)
