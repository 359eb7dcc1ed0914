"""
app/domain/clinical_note.py

Domain models used by the clinical note ingestion flow.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Union

RawRow = dict[str, str]


class NoteStatus:
    PROCESSED = "procesado"


@dataclass(frozen=True)
class ClinicalNoteRecord:
    """
    One structured clinical note produced from a valid ingested row.
    """

    id: uuid.UUID
    patient_id: str
    note_date: str
    clinician: str
    specialty: str
    visit_type: str
    original_content: str
    cleaned_content: str
    diagnoses: list[str]
    medications: list[str]
    keywords: list[str]
    ai_summary: str
    source_file: str
    source_row: int
    ingested_at: datetime
    status: str = NoteStatus.PROCESSED


@dataclass(frozen=True)
class ExistingNote:
    """
    Minimal projection of a stored note used for duplicate detection.
    """

    id: uuid.UUID
    original_content: str


class PutOutcome(str, Enum):
    CREATED = "created"
    ALREADY_EXISTS = "already_exists"


@dataclass(frozen=True)
class RowError:
    """
    One failed row with its raw data and a human-readable reason.
    """

    row_number: int
    raw_row: RawRow
    message: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "row": self.row_number,
            "rawRowData": dict(self.raw_row),
            "message": self.message,
        }


@dataclass(frozen=True)
class PersistedRow:
    record: ClinicalNoteRecord


@dataclass(frozen=True)
class SkippedDuplicate:
    patient_id: str
    note_date: str
    row_number: int


@dataclass(frozen=True)
class FailedRow:
    error: RowError


RowOutcome = Union[PersistedRow, SkippedDuplicate, FailedRow]


@dataclass(frozen=True)
class IngestionResult:
    """
    End-of-run summary for one ingested file.
    """

    file: str
    processed_count: int
    error_count: int
    errors: tuple[RowError, ...] = ()
    skipped_duplicates: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "processedCount": self.processed_count,
            "errorCount": self.error_count,
            "errors": [error.to_dict() for error in self.errors],
        }


@dataclass
class IngestionResultBuilder:
    """
    Accumulates row outcomes into a single IngestionResult.

    Independent of how rows are scheduled: callers only hand over outcomes.
    """

    file: str
    processed_count: int = 0
    skipped_duplicates: int = 0
    errors: list[RowError] = field(default_factory=list)

    def add(self, outcome: RowOutcome) -> None:
        if isinstance(outcome, PersistedRow):
            self.processed_count += 1
        elif isinstance(outcome, SkippedDuplicate):
            self.skipped_duplicates += 1
        elif isinstance(outcome, FailedRow):
            self.errors.append(outcome.error)
        else:
            raise TypeError(f"Unsupported row outcome: {type(outcome).__name__}")

    def build(self) -> IngestionResult:
        return IngestionResult(
            file=self.file,
            processed_count=self.processed_count,
            error_count=len(self.errors),
            errors=tuple(self.errors),
            skipped_duplicates=self.skipped_duplicates,
        )
