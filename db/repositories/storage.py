"""
Where uploaded CSV files live on disk.
"""

from __future__ import annotations

import logging
import os
import tempfile
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

from db.repositories.errors import FileStorageError
from db.repositories.types import StoredFileMetadata

logger = logging.getLogger(__name__)


class FileStorageBackend(Protocol):
    def save(
        self,
        *,
        file_name: str,
        content: bytes,
        content_type: str | None = None,
    ) -> StoredFileMetadata:
        ...

    def delete(self, *, storage_path: str) -> None:
        ...


class LocalFileStorage:
    """
    Stores each upload once under ``<root>/<YYYY>/<MM>/<hex>_<name>``.

    Returned ``storage_path`` values include the root so the CSV reader can
    open them as-is. Deletion is limited to paths inside the root.
    """

    def __init__(self, root_dir: str | Path = "data/uploads") -> None:
        self._root_dir = Path(root_dir)

    @property
    def root_dir(self) -> Path:
        return self._root_dir

    def save(
        self,
        *,
        file_name: str,
        content: bytes,
        content_type: str | None = None,
    ) -> StoredFileMetadata:
        base_name = Path(file_name).name.strip()
        if not base_name:
            raise FileStorageError("Invalid file name.")

        stored_at = datetime.now(timezone.utc)
        directory = self._root_dir / f"{stored_at:%Y}" / f"{stored_at:%m}"
        target = directory / f"{uuid.uuid4().hex}_{base_name}"

        try:
            directory.mkdir(parents=True, exist_ok=True)
            # Write then rename so readers never see a partial file.
            fd, tmp_name = tempfile.mkstemp(dir=directory, suffix=".part")
            try:
                with os.fdopen(fd, "wb") as handle:
                    handle.write(content)
                os.replace(tmp_name, target)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise FileStorageError("Failed to write uploaded file to storage.") from exc

        logger.info(
            "Stored upload file_name=%s path=%s bytes=%d content_type=%s",
            base_name,
            target,
            len(content),
            content_type,
        )
        return StoredFileMetadata(
            file_name=base_name,
            storage_path=target.as_posix(),
            size_bytes=len(content),
            stored_at=stored_at,
        )

    def delete(self, *, storage_path: str) -> None:
        target = Path(storage_path)
        if not target.resolve().is_relative_to(self._root_dir.resolve()):
            raise FileStorageError(f"Refusing to delete outside storage root: {storage_path}")
        try:
            target.unlink(missing_ok=True)
        except OSError as exc:
            raise FileStorageError("Failed to delete uploaded file from storage.") from exc
