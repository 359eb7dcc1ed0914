"""
app/schemas package marker.
"""

from app.schemas.note_ingestion import NoteIngestionResultResponse, RowErrorResponse

__all__ = [
    "NoteIngestionResultResponse",
    "RowErrorResponse",
]
