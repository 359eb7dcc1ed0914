"""
app/domain package marker.
"""

from app.domain.clinical_note import (
    ClinicalNoteRecord,
    ExistingNote,
    FailedRow,
    IngestionResult,
    IngestionResultBuilder,
    PersistedRow,
    PutOutcome,
    RawRow,
    RowError,
    RowOutcome,
    SkippedDuplicate,
)
from app.domain.errors import (
    ClinicalNotePersistenceError,
    DateFormatError,
    NoteFileFormatError,
    NoteIngestionError,
)

__all__ = [
    "ClinicalNotePersistenceError",
    "ClinicalNoteRecord",
    "DateFormatError",
    "ExistingNote",
    "FailedRow",
    "IngestionResult",
    "IngestionResultBuilder",
    "NoteFileFormatError",
    "NoteIngestionError",
    "PersistedRow",
    "PutOutcome",
    "RawRow",
    "RowError",
    "RowOutcome",
    "SkippedDuplicate",
]
