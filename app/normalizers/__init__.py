"""
app/normalizers package marker.
"""

from app.normalizers.date_normalizer import normalize_date
from app.normalizers.text_normalizer import (
    MAX_KEYWORDS,
    SPANISH_STOPWORDS,
    clean_text,
    extract_keywords,
    word_tokens,
)

__all__ = [
    "MAX_KEYWORDS",
    "SPANISH_STOPWORDS",
    "clean_text",
    "extract_keywords",
    "normalize_date",
    "word_tokens",
]
