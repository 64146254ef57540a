"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.column_mapping import ColumnMapping
from db.models.ingestion_job import IngestionJob, IngestionJobStatus
from db.models.record import Record
from db.models.source_file import SourceFile, SourceFileStatus

__all__ = [
    "ColumnMapping",
    "IngestionJob",
    "IngestionJobStatus",
    "Record",
    "SourceFile",
    "SourceFileStatus",
]
