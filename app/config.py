"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files

_ALLOWED_QUEUE_BACKENDS = {"scheduler", "background"}


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


@dataclass(frozen=True)
class CSVIngestionSettings:
    """
    Runtime settings for CSV preview and ingestion.
    """

    preview_rows: int = 10
    log_row_errors: bool = True


@dataclass(frozen=True)
class UploadSettings:
    """
    Upload intake limits and storage location.
    """

    storage_dir: str = "data/uploads"
    max_bytes: int = 10 * 1024 * 1024


@dataclass(frozen=True)
class JobQueueSettings:
    """
    Background job execution settings.
    """

    backend: str = "scheduler"
    worker_count: int = 2


@lru_cache(maxsize=1)
def get_log_level() -> str:
    return _get_str_env("LOG_LEVEL", "INFO").upper()


@lru_cache(maxsize=1)
def get_csv_ingestion_settings() -> CSVIngestionSettings:
    """
    Return cached CSV ingestion settings from environment variables.
    """

    return CSVIngestionSettings(
        preview_rows=max(1, _get_int_env("CSV_PREVIEW_ROWS", 10)),
        log_row_errors=_get_bool_env("CSV_INGEST_LOG_ROW_ERRORS", True),
    )


@lru_cache(maxsize=1)
def get_upload_settings() -> UploadSettings:
    """
    Return cached upload settings from environment variables.
    """

    return UploadSettings(
        storage_dir=_get_str_env("UPLOAD_STORAGE_DIR", "data/uploads"),
        max_bytes=max(1, _get_int_env("UPLOAD_MAX_BYTES", 10 * 1024 * 1024)),
    )


@lru_cache(maxsize=1)
def get_job_queue_settings() -> JobQueueSettings:
    """
    Return cached job queue settings.

    Unknown backends fall back to the scheduler.
    """

    backend = _get_str_env("JOB_QUEUE_BACKEND", "scheduler").lower()
    if backend not in _ALLOWED_QUEUE_BACKENDS:
        backend = "scheduler"
    return JobQueueSettings(
        backend=backend,
        worker_count=max(1, _get_int_env("JOB_WORKER_COUNT", 2)),
    )
