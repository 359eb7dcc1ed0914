"""
app/services/duplicate_detector.py

Near-duplicate detection against previously stored clinical notes.
"""

from __future__ import annotations

import logging

from app.domain.clinical_note import ExistingNote
from app.domain.errors import ClinicalNotePersistenceError
from app.logging_utils import log_event
from app.normalizers.text_normalizer import word_tokens
from app.repositories.clinical_note_repository import NotePersistenceGateway

logger = logging.getLogger(__name__)

DEFAULT_SIMILARITY_THRESHOLD = 0.8


def jaccard_similarity(left: set[str], right: set[str]) -> float:
    """
    Size of the intersection over size of the union; 0.0 for two empty sets.
    """

    union = left | right
    if not union:
        return 0.0
    return len(left & right) / len(union)


class DuplicateDetector:
    """
    Decides whether a candidate note repeats one already stored for the same
    patient and date.

    One instance serves one file. Stored notes are fetched once per
    (patient, date) pair and reused, so rows of the file being ingested are
    never compared with each other.
    """

    def __init__(
        self,
        store: NotePersistenceGateway,
        *,
        threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
    ) -> None:
        self._store = store
        self._threshold = threshold
        self._existing: dict[tuple[str, str], list[ExistingNote]] = {}

    def is_duplicate(self, patient_id: str, note_date: str, content: str) -> bool:
        candidate_tokens = word_tokens(content)
        for existing in self._existing_notes(patient_id, note_date):
            similarity = jaccard_similarity(candidate_tokens, word_tokens(existing.original_content))
            if similarity > self._threshold:
                logger.debug(
                    "Candidate matches stored note %s with similarity %.3f",
                    existing.id,
                    similarity,
                )
                return True
        return False

    def _existing_notes(self, patient_id: str, note_date: str) -> list[ExistingNote]:
        key = (patient_id, note_date)
        cached = self._existing.get(key)
        if cached is not None:
            return cached

        try:
            notes = list(self._store.query_by_patient_and_date(patient_id, note_date))
        except ClinicalNotePersistenceError as exc:
            # Lookup failure must not block ingestion; the row is treated as new.
            log_event(
                logger,
                logging.WARNING,
                "note_duplicate_lookup_failed",
                patient_id=patient_id,
                note_date=note_date,
                error=str(exc),
            )
            notes = []

        self._existing[key] = notes
        return notes
