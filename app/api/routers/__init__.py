"""
app/api/routers package marker.
"""

from app.api.routers.note_ingestion import router as note_ingestion_router

__all__ = [
    "note_ingestion_router",
]
