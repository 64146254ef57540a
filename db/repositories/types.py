"""
Value objects passed between the upload repository and storage.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class UploadFileInput:
    """
    Input payload for storing one uploaded CSV file.
    """

    file_name: str
    content: bytes
    content_type: str | None = None


@dataclass(frozen=True)
class StoredFileMetadata:
    """
    Metadata produced by the storage backend after saving a file.
    """

    file_name: str
    storage_path: str
    size_bytes: int
    stored_at: datetime
