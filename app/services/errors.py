"""
app/services/errors.py

Lookup failures raised by the service layer and mapped to 404 by routers.
"""

from __future__ import annotations


class SourceFileNotFoundError(LookupError):
    """Raised when a referenced source file does not exist."""

    def __init__(self, file_id: object) -> None:
        super().__init__(f"File not found with ID: {file_id}")
        self.file_id = file_id


class MappingNotFoundError(LookupError):
    """Raised when no column mapping matches the requested id(s)."""


class RecordNotFoundError(LookupError):
    """Raised when a typed record does not exist."""
