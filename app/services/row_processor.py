"""
app/services/row_processor.py

Turns one raw note-file row into a persisted record, a duplicate skip, or a
row error.
"""

from __future__ import annotations

import logging
import re
import uuid
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any, Mapping

from app.domain.clinical_note import (
    ClinicalNoteRecord,
    FailedRow,
    NoteStatus,
    PersistedRow,
    PutOutcome,
    RawRow,
    RowError,
    RowOutcome,
    SkippedDuplicate,
)
from app.domain.errors import ClinicalNotePersistenceError, DateFormatError
from app.logging_utils import log_event
from app.mappers.column_mapper import REQUIRED_FIELDS, ColumnMapper, ColumnMapping
from app.normalizers.date_normalizer import normalize_date
from app.normalizers.text_normalizer import clean_text, extract_keywords
from app.repositories.clinical_note_repository import NotePersistenceGateway
from app.services.duplicate_detector import DuplicateDetector
from summarization.summarizer import SummarizationGateway

logger = logging.getLogger(__name__)

DEFAULT_CLINICIAN = "No especificado"
DEFAULT_SPECIALTY = "General"
DEFAULT_VISIT_TYPE = "consulta_externa"

_LIST_SEPARATORS = re.compile(r"[;,|]")


def split_list_field(value: str | None) -> list[str]:
    """
    Split a `;`, `,` or `|` separated cell into trimmed, non-empty items.

    Order and repeated items are kept.
    """

    if not value:
        return []
    return [item.strip() for item in _LIST_SEPARATORS.split(value) if item.strip()]


class RowProcessor:
    """
    Validates, normalizes and persists one row at a time.

    Expected failures come back as FailedRow outcomes; nothing is raised for
    bad input.
    """

    def __init__(
        self,
        *,
        store: NotePersistenceGateway,
        duplicate_detector: DuplicateDetector,
        summarizer: SummarizationGateway | None = None,
        id_factory: Callable[[], uuid.UUID] = uuid.uuid4,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._duplicate_detector = duplicate_detector
        self._summarizer = summarizer
        self._id_factory = id_factory
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def process(
        self,
        raw_row: RawRow,
        mapping: ColumnMapping,
        *,
        file_id: str,
        row_number: int,
    ) -> RowOutcome:
        values = ColumnMapper.map_row(raw_row=raw_row, mapping=mapping)

        patient_id = self._parse_optional_string(values.get("patient_id"))
        raw_note_date = self._parse_optional_string(values.get("note_date"))
        content = self._parse_optional_string(values.get("content"))

        if patient_id is None or raw_note_date is None or content is None:
            present = {"patient_id": patient_id, "note_date": raw_note_date, "content": content}
            missing = [name for name in REQUIRED_FIELDS if present[name] is None]
            return self._fail(
                raw_row,
                row_number,
                f"Missing required fields: {', '.join(missing)}.",
            )

        try:
            note_date = normalize_date(raw_note_date)
        except DateFormatError as exc:
            return self._fail(raw_row, row_number, str(exc))

        if self._duplicate_detector.is_duplicate(patient_id, note_date, content):
            log_event(
                logger,
                logging.INFO,
                "note_duplicate_skipped",
                file=file_id,
                row=row_number,
                patient_id=patient_id,
                note_date=note_date,
            )
            return SkippedDuplicate(patient_id=patient_id, note_date=note_date, row_number=row_number)

        cleaned_content = clean_text(content)
        record = ClinicalNoteRecord(
            id=self._id_factory(),
            patient_id=patient_id,
            note_date=note_date,
            clinician=self._parse_optional_string(values.get("clinician")) or DEFAULT_CLINICIAN,
            specialty=self._parse_optional_string(values.get("specialty")) or DEFAULT_SPECIALTY,
            visit_type=self._parse_optional_string(values.get("visit_type")) or DEFAULT_VISIT_TYPE,
            original_content=content,
            cleaned_content=cleaned_content,
            diagnoses=split_list_field(values.get("diagnoses")),
            medications=split_list_field(values.get("medications")),
            keywords=extract_keywords(cleaned_content),
            ai_summary=self._summarize(cleaned_content, file_id=file_id, row_number=row_number),
            source_file=file_id,
            source_row=row_number,
            ingested_at=self._clock(),
            status=NoteStatus.PROCESSED,
        )

        try:
            outcome = self._store.put_if_absent(record)
        except ClinicalNotePersistenceError as exc:
            return self._fail(raw_row, row_number, str(exc))

        if outcome is PutOutcome.ALREADY_EXISTS:
            log_event(
                logger,
                logging.WARNING,
                "note_persistence_conflict",
                file=file_id,
                row=row_number,
                note_id=record.id,
            )
        else:
            logger.debug("Persisted note %s for patient %s from row %d", record.id, patient_id, row_number)
        return PersistedRow(record=record)

    def _summarize(self, content: str, *, file_id: str, row_number: int) -> str:
        if self._summarizer is None:
            return ""
        try:
            return self._summarizer.summarize(content)
        except Exception as exc:  # noqa: BLE001
            log_event(
                logger,
                logging.WARNING,
                "note_summary_failed",
                file=file_id,
                row=row_number,
                error=f"{type(exc).__name__}: {exc}",
            )
            return ""

    @staticmethod
    def _fail(raw_row: Mapping[str, str], row_number: int, message: str) -> FailedRow:
        return FailedRow(error=RowError(row_number=row_number, raw_row=dict(raw_row), message=message))

    @staticmethod
    def _parse_optional_string(value: Any) -> str | None:
        if value is None:
            return None
        stripped = str(value).strip()
        return stripped or None
