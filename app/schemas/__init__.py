"""
app/schemas package marker.
"""

from app.schemas.files import (
    FilePreviewResponse,
    FileUploadResponse,
    ProcessFileRequest,
    ProcessFileResponse,
    ProcessingResultResponse,
    ProcessQueuedResponse,
    RowErrorResponse,
    SourceFileResponse,
)
from app.schemas.health import HealthResponse
from app.schemas.jobs import IngestionJobStatusResponse, IngestionStatusListResponse
from app.schemas.mappings import (
    ColumnMappingBulkCreate,
    ColumnMappingCreate,
    ColumnMappingResponse,
    MappingSuggestionResponse,
    MappingSuggestionsResponse,
    TargetFieldResponse,
)
from app.schemas.records import RecordPageResponse, RecordResponse

__all__ = [
    "ColumnMappingBulkCreate",
    "ColumnMappingCreate",
    "ColumnMappingResponse",
    "FilePreviewResponse",
    "FileUploadResponse",
    "HealthResponse",
    "IngestionJobStatusResponse",
    "IngestionStatusListResponse",
    "MappingSuggestionResponse",
    "MappingSuggestionsResponse",
    "ProcessFileRequest",
    "ProcessFileResponse",
    "ProcessingResultResponse",
    "ProcessQueuedResponse",
    "RecordPageResponse",
    "RecordResponse",
    "RowErrorResponse",
    "SourceFileResponse",
    "TargetFieldResponse",
]
