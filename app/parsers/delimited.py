"""
app/parsers/delimited.py

Separator detection and row parsing for uploaded delimited note files.
"""

from __future__ import annotations

import csv
import io
import logging

from app.domain.clinical_note import RawRow
from app.domain.errors import NoteFileFormatError

logger = logging.getLogger(__name__)

DEFAULT_SEPARATOR = ","
CANDIDATE_SEPARATORS: tuple[str, ...] = (",", ";", "\t", "|")
_SAMPLE_LINES = 3

# Note content has no length cap; lift the csv module default of 128 KiB per cell.
MAX_FIELD_SIZE = 2**31 - 1
csv.field_size_limit(max(csv.field_size_limit(), MAX_FIELD_SIZE))


def detect_separator(text: str) -> str:
    """
    Infer the field separator from the first non-blank lines of a file.

    A candidate wins when every sampled line contains it the same non-zero
    number of times. Candidates are tried in priority order; falls back to
    a comma.
    """

    sample = [line for line in text.splitlines() if line.strip()][:_SAMPLE_LINES]
    if not sample:
        return DEFAULT_SEPARATOR

    for separator in CANDIDATE_SEPARATORS:
        counts = {line.count(separator) for line in sample}
        if len(counts) == 1 and counts.pop() > 0:
            logger.debug("Detected separator %r across %d sampled lines", separator, len(sample))
            return separator

    logger.debug("No consistent separator found; defaulting to %r", DEFAULT_SEPARATOR)
    return DEFAULT_SEPARATOR


def parse_delimited_rows(text: str, separator: str) -> tuple[list[str], list[RawRow]]:
    """
    Parse file text into its header list and one trimmed mapping per data line.

    Lines whose cells are all empty after trimming are skipped. Cells beyond
    the header width are dropped and missing trailing cells read as empty strings.

    Raises:
        NoteFileFormatError: when the text is not valid delimited data.
    """

    rows: list[RawRow] = []
    try:
        reader = csv.DictReader(io.StringIO(text, newline=""), delimiter=separator)
        headers = [header.strip() for header in (reader.fieldnames or [])]
        reader.fieldnames = headers

        for raw_row in reader:
            row = {
                key: str(value).strip() if value is not None else ""
                for key, value in raw_row.items()
                if key is not None
            }
            if any(row.values()):
                rows.append(row)
    except csv.Error as exc:
        raise NoteFileFormatError(f"Invalid delimited file: {exc}") from exc
    return headers, rows
