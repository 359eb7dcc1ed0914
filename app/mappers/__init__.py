"""
app/mappers package marker.
"""

from app.mappers.column_mapper import (
    DEFAULT_COLUMN_ALIASES,
    REQUIRED_FIELDS,
    STANDARD_FIELDS,
    ColumnMapper,
    ColumnMapping,
)

__all__ = [
    "DEFAULT_COLUMN_ALIASES",
    "REQUIRED_FIELDS",
    "STANDARD_FIELDS",
    "ColumnMapper",
    "ColumnMapping",
]
