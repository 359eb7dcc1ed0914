"""
app/services package marker.
"""

from app.services.duplicate_detector import DuplicateDetector, jaccard_similarity
from app.services.note_ingestion_service import (
    NoteIngestionService,
    get_note_ingestion_service,
)
from app.services.row_processor import RowProcessor, split_list_field

__all__ = [
    "DuplicateDetector",
    "NoteIngestionService",
    "RowProcessor",
    "get_note_ingestion_service",
    "jaccard_similarity",
    "split_list_field",
]
