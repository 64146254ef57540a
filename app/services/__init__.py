"""
app/services package marker.
"""

from app.services.file_service import FilePreview, FileService
from app.services.ingestion_pipeline import IngestionPipeline
from app.services.job_coordinator import JobCoordinator, JobLookupError, JobSchedulingError
from app.services.mapping_service import MappingService, get_mapping_service
from app.services.processing_service import ProcessingService, get_processing_service
from app.services.record_service import RecordPage, RecordService, get_record_service
from app.services.task_queue import (
    FastAPIBackgroundTaskExecutor,
    IngestionTaskExecutor,
    SchedulerTaskQueue,
    TaskQueueUnavailableError,
)

__all__ = [
    "FastAPIBackgroundTaskExecutor",
    "FilePreview",
    "FileService",
    "IngestionPipeline",
    "IngestionTaskExecutor",
    "JobCoordinator",
    "JobLookupError",
    "JobSchedulingError",
    "MappingService",
    "ProcessingService",
    "RecordPage",
    "RecordService",
    "SchedulerTaskQueue",
    "TaskQueueUnavailableError",
    "get_mapping_service",
    "get_processing_service",
    "get_record_service",
]
