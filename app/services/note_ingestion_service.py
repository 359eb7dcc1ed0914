"""
app/services/note_ingestion_service.py

Service layer for bulk clinical note ingestion.

One call ingests one file:

    1. detect the field separator and parse rows
    2. resolve the column mapping once from the header
    3. run every row through RowProcessor, in file order
    4. fold row outcomes into a single IngestionResult

A row failure is recorded and never stops the remaining rows. Rows are
committed individually; there is no file-level rollback.
"""

from __future__ import annotations

import logging
import time
from functools import lru_cache

from app.config import get_note_ingestion_settings, get_summarization_settings
from app.domain.clinical_note import (
    FailedRow,
    IngestionResult,
    IngestionResultBuilder,
    RawRow,
    RowError,
    RowOutcome,
)
from app.domain.errors import NoteFileFormatError
from app.logging_utils import log_event
from app.mappers.column_mapper import ColumnMapper, ColumnMapping
from app.parsers.delimited import detect_separator, parse_delimited_rows
from app.repositories.clinical_note_repository import NotePersistenceGateway
from app.services.duplicate_detector import DEFAULT_SIMILARITY_THRESHOLD, DuplicateDetector
from app.services.row_processor import RowProcessor
from db.repositories.errors import FileStorageError
from db.repositories.storage import FileSource, LocalFileStorage
from summarization.summarizer import SummarizationGateway, build_summarizer

logger = logging.getLogger(__name__)

# The header occupies line 1, so the first data row is line 2.
FIRST_DATA_ROW_NUMBER = 2


class NoteIngestionService:
    """
    Coordinates parsing, mapping, row processing and result aggregation.
    """

    def __init__(
        self,
        *,
        summarizer: SummarizationGateway | None = None,
        file_source: FileSource | None = None,
        mapper: ColumnMapper | None = None,
        duplicate_threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
        log_row_errors: bool = True,
    ) -> None:
        self._summarizer = summarizer
        self._file_source = file_source
        self._mapper = mapper or ColumnMapper()
        self._duplicate_threshold = duplicate_threshold
        self._log_row_errors = log_row_errors

    def ingest(
        self,
        file_id: str,
        raw_text: str,
        *,
        store: NotePersistenceGateway,
    ) -> IngestionResult:
        """
        Ingest one decoded file and return its result.

        Raises:
            NoteFileFormatError: when the file has no data row.
        """

        started = time.perf_counter()
        separator = detect_separator(raw_text)
        headers, rows = parse_delimited_rows(raw_text, separator)
        if not rows:
            raise NoteFileFormatError(
                f"File {file_id} must contain at least one data row besides the header."
            )

        mapping = self._mapper.build_mapping(headers)
        log_event(
            logger,
            logging.INFO,
            "note_ingestion_started",
            file=file_id,
            separator=separator,
            rows=len(rows),
            mapping=dict(mapping.field_to_source),
            unmapped=list(mapping.unmapped_fields),
        )

        processor = RowProcessor(
            store=store,
            duplicate_detector=DuplicateDetector(store, threshold=self._duplicate_threshold),
            summarizer=self._summarizer,
        )
        builder = IngestionResultBuilder(file=file_id)
        for row_number, raw_row in enumerate(rows, start=FIRST_DATA_ROW_NUMBER):
            outcome = self._process_row(
                processor,
                raw_row,
                mapping,
                file_id=file_id,
                row_number=row_number,
            )
            if isinstance(outcome, FailedRow):
                self._record_error(file_id, outcome.error)
            builder.add(outcome)

        result = builder.build()
        log_event(
            logger,
            logging.INFO,
            "note_ingestion_completed",
            file=file_id,
            processed=result.processed_count,
            failed=result.error_count,
            skipped_duplicates=result.skipped_duplicates,
            elapsed_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        return result

    def ingest_file(self, file_id: str, *, store: NotePersistenceGateway) -> IngestionResult:
        """
        Read a stored file through the file source, then ingest it.

        Raises:
            NoteFileFormatError: when the file cannot be read or has no data row.
        """

        if self._file_source is None:
            raise RuntimeError("NoteIngestionService was built without a file source.")
        try:
            raw_text = self._file_source.read_text(file_id)
        except FileStorageError as exc:
            raise NoteFileFormatError(f"File {file_id} could not be read: {exc}") from exc
        return self.ingest(file_id, raw_text, store=store)

    @staticmethod
    def _process_row(
        processor: RowProcessor,
        raw_row: RawRow,
        mapping: ColumnMapping,
        *,
        file_id: str,
        row_number: int,
    ) -> RowOutcome:
        try:
            return processor.process(raw_row, mapping, file_id=file_id, row_number=row_number)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected failure processing file=%s row=%d", file_id, row_number)
            return FailedRow(
                error=RowError(
                    row_number=row_number,
                    raw_row=dict(raw_row),
                    message=f"Unexpected error: {exc}",
                )
            )

    def _record_error(self, file_id: str, error: RowError) -> None:
        if not self._log_row_errors:
            return
        log_event(
            logger,
            logging.WARNING,
            "note_row_failed",
            file=file_id,
            row=error.row_number,
            message=error.message,
        )


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_note_ingestion_service() -> NoteIngestionService:
    """
    Build and cache the ingestion service with env-driven settings.
    """

    settings = get_note_ingestion_settings()
    summarizer: SummarizationGateway | None = None
    if settings.summarization_enabled:
        llm = get_summarization_settings()
        summarizer = build_summarizer(
            adapter_name=llm.adapter,
            model=llm.model,
            max_tokens=llm.max_tokens,
            temperature=llm.temperature,
            timeout_seconds=llm.timeout_seconds,
            api_key=llm.api_key,
            base_url=llm.base_url,
            min_content_chars=llm.min_content_chars,
        )
    return NoteIngestionService(
        summarizer=summarizer,
        file_source=LocalFileStorage(settings.upload_dir),
        duplicate_threshold=settings.duplicate_similarity_threshold,
        log_row_errors=settings.log_row_errors,
    )
