"""
Upload intake: validate, store the bytes, register a source file.

No CSV parsing happens here.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from db.models.source_file import SourceFile, SourceFileStatus
from db.repositories.errors import FileStorageError, SourceFilePersistenceError
from db.repositories.source_file_repository import SourceFileRepository
from db.repositories.storage import FileStorageBackend, LocalFileStorage
from db.repositories.types import StoredFileMetadata, UploadFileInput
from db.repositories.validators import DEFAULT_MAX_UPLOAD_BYTES, validate_upload_payload

logger = logging.getLogger(__name__)


class UploadRepository:
    def __init__(
        self,
        *,
        session_factory: Callable[[], Session] | None = None,
        storage_backend: FileStorageBackend | None = None,
        max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
    ) -> None:
        if session_factory is None:
            from db.session import SessionLocal

            session_factory = SessionLocal
        self._session_factory = session_factory
        self._storage_backend = storage_backend or LocalFileStorage()
        self._max_bytes = max_bytes

    def store_upload(self, payload: UploadFileInput) -> SourceFile:
        """
        Store one uploaded CSV and insert its ``uploaded`` source-file row.

        The row is committed in its own transaction. If that fails the stored
        file is removed again so no orphan is left on disk.

        Raises:
            UploadValidationError: rejected before anything is written.
            FileStorageError: the bytes could not be stored.
            SourceFilePersistenceError: the row could not be inserted.
        """

        validate_upload_payload(payload, max_bytes=self._max_bytes)
        stored = self._storage_backend.save(
            file_name=payload.file_name,
            content=payload.content,
            content_type=payload.content_type,
        )

        try:
            source_file = self._register(stored)
        except SQLAlchemyError as exc:
            self._discard(stored.storage_path)
            raise SourceFilePersistenceError("Failed to persist source file metadata.") from exc
        except Exception:
            self._discard(stored.storage_path)
            raise

        logger.info(
            "Registered source file id=%s name=%s bytes=%d",
            source_file.id,
            source_file.file_name,
            stored.size_bytes,
        )
        return source_file

    def _register(self, stored: StoredFileMetadata) -> SourceFile:
        with self._session_factory() as session:
            with session.begin():
                source_file = SourceFileRepository(session).create_file(
                    file_name=stored.file_name,
                    file_path=stored.storage_path,
                    status=SourceFileStatus.UPLOADED,
                )
            session.refresh(source_file)
            # Detached copy stays readable after the session closes.
            session.expunge(source_file)
        return source_file

    def _discard(self, storage_path: str) -> None:
        try:
            self._storage_backend.delete(storage_path=storage_path)
        except FileStorageError:
            logger.warning("Could not remove orphaned upload path=%s", storage_path)
