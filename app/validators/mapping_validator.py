"""
app/validators/mapping_validator.py

Validation for operator-declared column mappings.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Sequence

from app.domain.field_catalog import is_known_field
from app.domain.ingestion import ColumnMappingLike


@dataclass(frozen=True)
class MappingErrorDetail:
    """
    Structured mapping error detail.
    """

    code: str
    message: str
    db_field_name: str | None = None
    csv_column_name: str | None = None
    context: dict[str, Any] | None = None


class SchemaMappingError(ValueError):
    """
    Raised when a mapping set cannot be accepted.
    """

    def __init__(self, *, message: str, errors: Sequence[MappingErrorDetail]) -> None:
        super().__init__(message)
        self.message = message
        self.errors = tuple(errors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "errors": [
                {
                    "code": error.code,
                    "message": error.message,
                    "db_field_name": error.db_field_name,
                    "csv_column_name": error.csv_column_name,
                    "context": error.context,
                }
                for error in self.errors
            ],
        }


class InvalidFieldError(SchemaMappingError):
    """
    Raised when a mapping targets a field outside the field catalog.
    """

    def __init__(self, field_name: str | None, *, csv_column_name: str | None = None) -> None:
        self.field_name = field_name
        super().__init__(
            message=f"Invalid database field: {field_name}",
            errors=[
                MappingErrorDetail(
                    code="invalid_field",
                    message="Mapping references an unknown target field.",
                    db_field_name=field_name,
                    csv_column_name=csv_column_name,
                )
            ],
        )


class MappingValidator:
    """
    Validates candidate mappings against the field catalog.
    """

    def __init__(self, *, is_known: Callable[[str | None], bool] = is_known_field) -> None:
        self._is_known = is_known

    def validate(self, candidates: Iterable[ColumnMappingLike]) -> None:
        """
        Raise ``InvalidFieldError`` for the first mapping with an unknown field.
        """

        for candidate in candidates:
            if not self._is_known(candidate.db_field_name):
                raise InvalidFieldError(
                    candidate.db_field_name,
                    csv_column_name=candidate.csv_column_name,
                )
