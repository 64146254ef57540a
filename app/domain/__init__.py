"""
app/domain package marker.
"""

from app.domain.field_catalog import TargetField, get_available_fields, is_known_field
from app.domain.ingestion import (
    CoercionIssue,
    JobSnapshot,
    MappingSpec,
    ProcessingResult,
    RowError,
    SuggestedMapping,
    TypedRecord,
)

__all__ = [
    "CoercionIssue",
    "JobSnapshot",
    "MappingSpec",
    "ProcessingResult",
    "RowError",
    "SuggestedMapping",
    "TargetField",
    "TypedRecord",
    "get_available_fields",
    "is_known_field",
]
