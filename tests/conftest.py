"""
Shared pytest fixtures: in-memory stand-ins for the note store and the
summarization gateway. No database, no network.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from datetime import datetime, timezone

import pytest

from app.domain.clinical_note import ClinicalNoteRecord, ExistingNote, PutOutcome
from app.domain.errors import ClinicalNotePersistenceError


class InMemoryNoteStore:
    """Dict-backed implementation of the note persistence gateway."""

    def __init__(self) -> None:
        self.records: dict[uuid.UUID, ClinicalNoteRecord] = {}
        self.queries: list[tuple[str, str]] = []
        self.put_attempts = 0
        self.fail_queries = False
        self.failing_patients: set[str] = set()

    def query_by_patient_and_date(self, patient_id: str, note_date: str) -> list[ExistingNote]:
        self.queries.append((patient_id, note_date))
        if self.fail_queries:
            raise ClinicalNotePersistenceError("note store unavailable")
        return [
            ExistingNote(id=record.id, original_content=record.original_content)
            for record in self.records.values()
            if record.patient_id == patient_id and record.note_date == note_date
        ]

    def put_if_absent(self, record: ClinicalNoteRecord) -> PutOutcome:
        self.put_attempts += 1
        if record.patient_id in self.failing_patients:
            raise ClinicalNotePersistenceError(f"Failed to persist clinical note {record.id}.")
        if record.id in self.records:
            return PutOutcome.ALREADY_EXISTS
        self.records[record.id] = record
        return PutOutcome.CREATED


class RecordingSummarizer:
    """Summarization gateway that records calls and can be told to fail."""

    def __init__(self, response: str = "Resumen de prueba", error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[str] = []

    def summarize(self, content: str) -> str:
        self.calls.append(content)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture()
def store() -> InMemoryNoteStore:
    return InMemoryNoteStore()


@pytest.fixture()
def summarizer() -> RecordingSummarizer:
    return RecordingSummarizer()


@pytest.fixture()
def make_record() -> Callable[..., ClinicalNoteRecord]:
    """Factory for stored notes with sensible defaults."""

    def _make(
        *,
        patient_id: str = "P-001",
        note_date: str = "2024-03-05",
        content: str = "Paciente con cefalea intensa desde hace tres días",
        record_id: uuid.UUID | None = None,
    ) -> ClinicalNoteRecord:
        return ClinicalNoteRecord(
            id=record_id or uuid.uuid4(),
            patient_id=patient_id,
            note_date=note_date,
            clinician="Dra. Rojas",
            specialty="Neurología",
            visit_type="control",
            original_content=content,
            cleaned_content=content,
            diagnoses=[],
            medications=[],
            keywords=[],
            ai_summary="",
            source_file="seed.csv",
            source_row=2,
            ingested_at=datetime(2024, 3, 5, tzinfo=timezone.utc),
        )

    return _make
