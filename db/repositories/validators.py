"""
Validation helpers for upload repository flows.
"""

from __future__ import annotations

from pathlib import Path

from db.repositories.errors import UploadValidationError
from db.repositories.types import UploadFileInput

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024

ALLOWED_EXTENSIONS = {".csv"}
ALLOWED_CONTENT_TYPES = {"text/csv", "application/csv"}


def is_csv_upload(file_name: str | None, content_type: str | None) -> bool:
    """
    Accept a file when either its extension or its MIME type says CSV.
    """

    extension = Path(file_name or "").suffix.lower()
    if extension in ALLOWED_EXTENSIONS:
        return True
    mime = (content_type or "").split(";", 1)[0].strip().lower()
    return mime in ALLOWED_CONTENT_TYPES


def validate_upload_payload(
    payload: UploadFileInput,
    *,
    max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
) -> None:
    """
    Validate file upload payload before storage and DB persistence.
    """

    if not payload.file_name or not payload.file_name.strip():
        raise UploadValidationError("file_name is required.")

    if not is_csv_upload(payload.file_name, payload.content_type):
        raise UploadValidationError("Only CSV files are allowed.")

    if not payload.content:
        raise UploadValidationError("Uploaded file content is empty.")

    if len(payload.content) > max_bytes:
        raise UploadValidationError(
            f"Uploaded file exceeds the {max_bytes} byte size limit."
        )
