"""
app/repositories package marker.
"""

from app.repositories.clinical_note_repository import (
    ClinicalNoteRepository,
    NotePersistenceGateway,
)

__all__ = [
    "ClinicalNoteRepository",
    "NotePersistenceGateway",
]
