"""
app/repositories package marker.
"""

from app.repositories.ingestion_store import IngestionStore, SqlAlchemyIngestionStore

__all__ = [
    "IngestionStore",
    "SqlAlchemyIngestionStore",
]
