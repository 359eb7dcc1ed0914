"""
app/normalizers/date_normalizer.py

Parses heterogeneous note dates into canonical YYYY-MM-DD strings.
"""

from __future__ import annotations

import re
from datetime import date, datetime

from dateutil import parser as dateparser

from app.domain.errors import DateFormatError


# Order matters: day/month/year is tried before month/day/year, so an
# ambiguous value such as 03/04/2024 always resolves to 3 April.
STRICT_DATE_FORMATS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\d{4}-\d{2}-\d{2}"), "%Y-%m-%d"),
    (re.compile(r"\d{2}/\d{2}/\d{4}"), "%d/%m/%Y"),
    (re.compile(r"\d{2}/\d{2}/\d{4}"), "%m/%d/%Y"),
    (re.compile(r"\d{2}-\d{2}-\d{4}"), "%d-%m-%Y"),
    (re.compile(r"\d{4}/\d{2}/\d{2}"), "%Y/%m/%d"),
    (re.compile(r"\d{2}\.\d{2}\.\d{4}"), "%d.%m.%Y"),
    (re.compile(r"\d{4}\.\d{2}\.\d{2}"), "%Y.%m.%d"),
)

MIN_LENIENT_YEAR = 1900
MAX_LENIENT_YEAR = 2100


def _parse_strict(raw: str) -> date | None:
    for pattern, fmt in STRICT_DATE_FORMATS:
        if not pattern.fullmatch(raw):
            continue
        try:
            return datetime.strptime(raw, fmt).date()
        except ValueError:
            continue
    return None


def _parse_lenient(raw: str) -> date | None:
    try:
        parsed = dateparser.parse(raw)
    except (ValueError, OverflowError):
        return None
    if not MIN_LENIENT_YEAR <= parsed.year <= MAX_LENIENT_YEAR:
        return None
    return parsed.date()


def normalize_date(value: str) -> str:
    """
    Normalize a raw date string to YYYY-MM-DD.

    Explicit formats are tried first, each requiring an exact match. Anything
    else goes through a lenient parse that only accepts years 1900-2100.

    Raises:
        DateFormatError: when no format applies.
    """

    raw = value.strip()
    if not raw:
        raise DateFormatError(value)

    parsed = _parse_strict(raw) or _parse_lenient(raw)
    if parsed is None:
        raise DateFormatError(raw)
    # strftime("%Y") does not zero-pad years below 1000 on every platform.
    return parsed.isoformat()
