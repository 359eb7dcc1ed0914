"""
tests/test_date_normalizer.py

Pytest unit tests for note date normalization.
"""

from __future__ import annotations

import pytest

from app.domain.errors import DateFormatError
from app.normalizers.date_normalizer import normalize_date


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2024-03-05", "2024-03-05"),
        ("05/03/2024", "2024-03-05"),
        ("05-03-2024", "2024-03-05"),
        ("2024/03/05", "2024-03-05"),
        ("05.03.2024", "2024-03-05"),
        ("2024.03.05", "2024-03-05"),
        ("  2024-03-05  ", "2024-03-05"),
    ],
)
def test_explicit_formats(raw: str, expected: str) -> None:
    assert normalize_date(raw) == expected


def test_ambiguous_numeric_date_reads_day_first() -> None:
    assert normalize_date("03/04/2024") == "2024-04-03"


def test_month_first_used_when_day_first_is_impossible() -> None:
    assert normalize_date("12/25/2024") == "2024-12-25"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("March 5, 2024", "2024-03-05"),
        ("2024-03-05T10:30:00", "2024-03-05"),
        ("5 Mar 2024", "2024-03-05"),
    ],
)
def test_lenient_fallback(raw: str, expected: str) -> None:
    assert normalize_date(raw) == expected


def test_single_digit_parts_fall_through_to_lenient_parse() -> None:
    # Not an exact match for any explicit format; the lenient parser reads
    # month first.
    assert normalize_date("5/3/2024") == "2024-05-03"


@pytest.mark.parametrize(
    "raw",
    [
        "31/31/2024",
        "2024-02-30",
        "no registrada",
        "5 March 1850",
        "",
        "   ",
    ],
)
def test_unrecognized_dates_raise(raw: str) -> None:
    with pytest.raises(DateFormatError) as exc_info:
        normalize_date(raw)

    assert "Unrecognized date format" in str(exc_info.value)


def test_explicit_format_is_not_year_bounded() -> None:
    assert normalize_date("1850-01-01") == "1850-01-01"


def test_years_below_1000_are_zero_padded() -> None:
    assert normalize_date("0999-01-01") == "0999-01-01"
