"""
app/api/routers package marker.
"""

from app.api.routers.files import router as files_router
from app.api.routers.mappings import router as mappings_router
from app.api.routers.records import router as records_router

__all__ = [
    "files_router",
    "mappings_router",
    "records_router",
]
