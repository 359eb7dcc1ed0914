"""
app/normalizers/text_normalizer.py

Free-text cleaning and keyword extraction for clinical note content.
"""

from __future__ import annotations

import re

MAX_KEYWORDS = 20
MIN_KEYWORD_LENGTH = 4

SPANISH_STOPWORDS: frozenset[str] = frozenset(
    {
        "el", "la", "de", "que", "y", "a", "en", "un", "es", "se", "no", "te",
        "lo", "le", "da", "su", "por", "son", "con", "para", "al", "del", "los",
        "las", "una", "nos", "me", "mi", "si", "ya", "muy", "más", "pero",
        "todo", "sin", "dos", "bien", "hacer", "como", "va", "vez", "vida",
        "día", "otro", "ser", "sobre", "este", "esta", "sus", "tiene", "años",
        "puede", "cada", "entre", "durante", "hace", "había", "hasta", "donde",
        "fue", "sido",
    }
)

_WHITESPACE_RUN = re.compile(r"\s+")
# \w is Unicode-aware, so accented letters and ñ/ü are kept.
_DISALLOWED_CHARS = re.compile(r"[^\w\s.,;:()\-]")
_NON_WORD_RUN = re.compile(r"\W+")


def clean_text(text: str | None) -> str:
    """
    Collapse whitespace, drop unsupported punctuation and trim.
    """

    if not text:
        return ""
    collapsed = _WHITESPACE_RUN.sub(" ", str(text))
    return _DISALLOWED_CHARS.sub("", collapsed).strip()


def extract_keywords(text: str | None, *, limit: int = MAX_KEYWORDS) -> list[str]:
    """
    Return up to `limit` distinct keywords in first-occurrence order.

    Tokens shorter than MIN_KEYWORD_LENGTH and Spanish stopwords are skipped.
    """

    if not text:
        return []

    keywords: list[str] = []
    seen: set[str] = set()
    for token in _NON_WORD_RUN.split(text.lower()):
        if len(token) < MIN_KEYWORD_LENGTH or token in SPANISH_STOPWORDS or token in seen:
            continue
        seen.add(token)
        keywords.append(token)
        if len(keywords) >= limit:
            break
    return keywords


def word_tokens(text: str | None) -> set[str]:
    """Lowercase word-token set used for similarity comparisons."""

    if not text:
        return set()
    return {token for token in _NON_WORD_RUN.split(text.lower()) if token}
