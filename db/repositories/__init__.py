"""
Repository layer exports.
"""

from db.repositories.column_mapping_repository import ColumnMappingRepository
from db.repositories.errors import (
    FileStorageError,
    JobStateError,
    RecordPersistenceError,
    SourceFilePersistenceError,
    UploadRepositoryError,
    UploadValidationError,
)
from db.repositories.ingestion_job_repository import IngestionJobRepository
from db.repositories.record_repository import RecordRepository
from db.repositories.source_file_repository import SourceFileRepository
from db.repositories.storage import FileStorageBackend, LocalFileStorage
from db.repositories.types import StoredFileMetadata, UploadFileInput
from db.repositories.upload_repository import UploadRepository

__all__ = [
    "ColumnMappingRepository",
    "IngestionJobRepository",
    "RecordRepository",
    "SourceFileRepository",
    "UploadRepository",
    "UploadFileInput",
    "StoredFileMetadata",
    "FileStorageBackend",
    "LocalFileStorage",
    "UploadRepositoryError",
    "UploadValidationError",
    "FileStorageError",
    "SourceFilePersistenceError",
    "RecordPersistenceError",
    "JobStateError",
]
