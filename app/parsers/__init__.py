"""
app/parsers package marker.
"""

from app.parsers.delimited import (
    CANDIDATE_SEPARATORS,
    DEFAULT_SEPARATOR,
    detect_separator,
    parse_delimited_rows,
)

__all__ = [
    "CANDIDATE_SEPARATORS",
    "DEFAULT_SEPARATOR",
    "detect_separator",
    "parse_delimited_rows",
]
