"""
tests/test_text_normalizer.py

Pytest unit tests for note text cleaning and keyword extraction.
"""

from __future__ import annotations

from app.normalizers.text_normalizer import (
    MAX_KEYWORDS,
    clean_text,
    extract_keywords,
    word_tokens,
)


class TestCleanText:
    def test_collapses_whitespace_and_drops_symbols(self) -> None:
        raw = "Paciente   con\tdolor!!  (agudo) - 38.5°C"
        assert clean_text(raw) == "Paciente con dolor (agudo) - 38.5C"

    def test_keeps_allowed_punctuation_and_accents(self) -> None:
        raw = "Dx: hipertensión, diabetes; niño (control)."
        assert clean_text(raw) == raw

    def test_newlines_become_single_spaces(self) -> None:
        assert clean_text("  Línea uno\n\n\nLínea dos  ") == "Línea uno Línea dos"

    def test_empty_and_none(self) -> None:
        assert clean_text("") == ""
        assert clean_text(None) == ""


class TestExtractKeywords:
    def test_drops_stopwords_and_short_tokens(self) -> None:
        text = "El paciente presenta hipertensión arterial severa"
        assert extract_keywords(text) == [
            "paciente",
            "presenta",
            "hipertensión",
            "arterial",
            "severa",
        ]

    def test_keywords_are_lowercase_and_unique_in_first_seen_order(self) -> None:
        text = " ".join(["fiebre"] * 25 + ["Cefalea", "FIEBRE"])
        assert extract_keywords(text) == ["fiebre", "cefalea"]

    def test_stopwords_of_keyword_length_are_dropped(self) -> None:
        assert extract_keywords("durante hasta donde tiene dolor") == ["dolor"]

    def test_only_listed_stopwords_are_dropped(self) -> None:
        assert extract_keywords("dolor desde ayer cuando camina") == [
            "dolor",
            "desde",
            "ayer",
            "cuando",
            "camina",
        ]

    def test_capped_at_twenty_distinct_keywords(self) -> None:
        words = [f"termino{chr(ord('a') + index)}" for index in range(26)]
        keywords = extract_keywords(" ".join(words))

        assert len(keywords) == MAX_KEYWORDS
        assert keywords == words[:MAX_KEYWORDS]

    def test_custom_limit(self) -> None:
        assert extract_keywords("dolor fiebre cefalea", limit=2) == ["dolor", "fiebre"]

    def test_punctuation_splits_tokens(self) -> None:
        assert extract_keywords("dolor,fiebre;(cefalea)") == ["dolor", "fiebre", "cefalea"]

    def test_empty_text(self) -> None:
        assert extract_keywords("") == []
        assert extract_keywords(None) == []


def test_word_tokens_are_lowercase_sets() -> None:
    assert word_tokens("Dolor, dolor y FIEBRE.") == {"dolor", "y", "fiebre"}
    assert word_tokens("") == set()
