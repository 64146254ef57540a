"""
app/mappers package marker.
"""

from app.mappers.schema_mapper import MappedRow, ResolvedColumn, SchemaMapper, normalize_header

__all__ = [
    "MappedRow",
    "ResolvedColumn",
    "SchemaMapper",
    "normalize_header",
]
