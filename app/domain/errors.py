"""
app/domain/errors.py

Exceptions raised by the clinical note ingestion flow.
"""

from __future__ import annotations


class NoteIngestionError(Exception):
    """Base exception for clinical note ingestion failures."""


class NoteFileFormatError(NoteIngestionError, ValueError):
    """
    Raised when an uploaded file cannot be ingested at all.

    File-level: no rows are processed.
    """


class DateFormatError(NoteIngestionError, ValueError):
    """Raised when a note date matches no supported format."""

    def __init__(self, raw_value: str) -> None:
        super().__init__(f"Unrecognized date format: {raw_value}")
        self.raw_value = raw_value


class ClinicalNotePersistenceError(NoteIngestionError, RuntimeError):
    """Raised when the note store is unreachable or rejects a read/write."""
