"""
db/models/clinical_note.py

Structured clinical note produced by bulk file ingestion.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime

from sqlalchemy import Date, DateTime, Index, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base


class ClinicalNote(Base):
    """
    One clinical note row.

    The id is generated by the ingestion pipeline; the table never assigns it.
    """

    __tablename__ = "clinical_notes"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True)
    patient_id: Mapped[str] = mapped_column(Text, nullable=False)
    note_date: Mapped[date] = mapped_column(Date, nullable=False)
    clinician: Mapped[str] = mapped_column(String(255), nullable=False)
    specialty: Mapped[str] = mapped_column(String(120), nullable=False)
    visit_type: Mapped[str] = mapped_column(String(120), nullable=False)
    original_content: Mapped[str] = mapped_column(Text, nullable=False)
    cleaned_content: Mapped[str] = mapped_column(Text, nullable=False)
    diagnoses: Mapped[list[str]] = mapped_column(JSONB, nullable=False, default=list)
    medications: Mapped[list[str]] = mapped_column(JSONB, nullable=False, default=list)
    keywords: Mapped[list[str]] = mapped_column(JSONB, nullable=False, default=list)
    ai_summary: Mapped[str] = mapped_column(Text, nullable=False, default="")
    source_file: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        comment="Identifier of the uploaded file the note came from",
    )
    source_row: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="1-indexed line in the source file; the header is line 1",
    )
    ingested_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    __table_args__ = (
        Index("ix_clinical_notes_patient_id", "patient_id"),
        Index("ix_clinical_notes_note_date", "note_date"),
        Index("ix_clinical_notes_patient_id_note_date", "patient_id", "note_date"),
        Index("ix_clinical_notes_source_file", "source_file"),
    )
