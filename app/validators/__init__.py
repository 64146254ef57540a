"""
app/validators package marker.
"""

from app.validators.mapping_validator import (
    InvalidFieldError,
    MappingErrorDetail,
    MappingValidator,
    SchemaMappingError,
)
from app.validators.type_coercion import CoercionResult, DataType, coerce_value, resolve_data_type

__all__ = [
    "CoercionResult",
    "DataType",
    "InvalidFieldError",
    "MappingErrorDetail",
    "MappingValidator",
    "SchemaMappingError",
    "coerce_value",
    "resolve_data_type",
]
