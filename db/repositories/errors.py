"""
Repository-layer exceptions for upload, record and job persistence flows.
"""

from __future__ import annotations


class UploadRepositoryError(Exception):
    """Base exception for upload repository failures."""


class UploadValidationError(UploadRepositoryError):
    """Raised when upload payload validation fails."""


class FileStorageError(UploadRepositoryError):
    """Raised when storing or deleting uploaded files fails."""


class SourceFilePersistenceError(UploadRepositoryError):
    """Raised when source file metadata persistence fails."""


class RecordPersistenceError(Exception):
    """Raised when one typed record cannot be written."""


class JobStateError(Exception):
    """
    Raised on an illegal ingestion job status transition.
    """

    def __init__(self, *, job_id: object, current: str, target: str) -> None:
        super().__init__(
            f"Illegal ingestion job transition for {job_id}: {current} -> {target}"
        )
        self.job_id = job_id
        self.current = current
        self.target = target
