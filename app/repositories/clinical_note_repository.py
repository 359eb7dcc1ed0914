"""
app/repositories/clinical_note_repository.py

Persistence layer for clinical note records.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Protocol

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.clinical_note import ClinicalNoteRecord, ExistingNote, PutOutcome
from app.domain.errors import ClinicalNotePersistenceError
from db.models.clinical_note import ClinicalNote


class NotePersistenceGateway(Protocol):
    """
    Store operations the ingestion pipeline depends on.
    """

    def query_by_patient_and_date(self, patient_id: str, note_date: str) -> list[ExistingNote]:
        ...

    def put_if_absent(self, record: ClinicalNoteRecord) -> PutOutcome:
        ...


class ClinicalNoteRepository:
    """
    PostgreSQL-backed note store.

    Every successful write is committed on its own, so notes persisted before
    a later failure stay persisted.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def query_by_patient_and_date(self, patient_id: str, note_date: str) -> list[ExistingNote]:
        """
        Return stored notes for one patient on one canonical date.
        """

        stmt = (
            select(ClinicalNote.id, ClinicalNote.original_content)
            .where(ClinicalNote.patient_id == patient_id)
            .where(ClinicalNote.note_date == date.fromisoformat(note_date))
        )
        try:
            rows = self._session.execute(stmt).all()
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise ClinicalNotePersistenceError("Failed to query existing clinical notes.") from exc
        return [ExistingNote(id=row.id, original_content=row.original_content) for row in rows]

    def put_if_absent(self, record: ClinicalNoteRecord) -> PutOutcome:
        """
        Insert one note unless a note with the same id already exists.
        """

        stmt = (
            insert(ClinicalNote)
            .values(self._to_payload(record))
            .on_conflict_do_nothing(index_elements=[ClinicalNote.id])
            .returning(ClinicalNote.id)
        )
        try:
            inserted_id = self._session.scalars(stmt).first()
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            raise ClinicalNotePersistenceError(
                f"Failed to persist clinical note {record.id}."
            ) from exc
        return PutOutcome.CREATED if inserted_id is not None else PutOutcome.ALREADY_EXISTS

    @staticmethod
    def _to_payload(record: ClinicalNoteRecord) -> dict[str, Any]:
        return {
            "id": record.id,
            "patient_id": record.patient_id,
            "note_date": date.fromisoformat(record.note_date),
            "clinician": record.clinician,
            "specialty": record.specialty,
            "visit_type": record.visit_type,
            "original_content": record.original_content,
            "cleaned_content": record.cleaned_content,
            "diagnoses": list(record.diagnoses),
            "medications": list(record.medications),
            "keywords": list(record.keywords),
            "ai_summary": record.ai_summary,
            "source_file": record.source_file,
            "source_row": record.source_row,
            "ingested_at": record.ingested_at,
            "status": record.status,
        }
