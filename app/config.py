"""
app/config.py

Environment-driven settings for note ingestion and summarization.

Every getter is memoized; tests call `.cache_clear()` after changing the
environment. Unparseable values fall back to the documented default.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache
from typing import TypeVar

from db.config import load_env_files

T = TypeVar("T")

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    load_env_files()


def _read_env(name: str) -> str | None:
    """Return the trimmed value of `name`, or None when unset or blank."""

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return None
    return value.strip() or None


def _parse_env(name: str, parse: Callable[[str], T], default: T) -> T:
    raw_value = _read_env(name)
    if raw_value is None:
        return default
    try:
        return parse(raw_value)
    except ValueError:
        return default


def _get_bool_env(name: str, default: bool) -> bool:
    return _parse_env(name, lambda raw: raw.lower() in _TRUE_VALUES, default)


def _get_int_env(name: str, default: int) -> int:
    return _parse_env(name, int, default)


def _get_float_env(name: str, default: float) -> float:
    return _parse_env(name, float, default)


def _get_str_env(name: str, default: str) -> str:
    return _read_env(name) or default


def _get_optional_str_env(name: str) -> str | None:
    return _read_env(name)


@dataclass(frozen=True)
class NoteIngestionSettings:
    """
    Runtime settings for clinical note file ingestion.
    """

    duplicate_similarity_threshold: float = 0.8
    summarization_enabled: bool = True
    log_row_errors: bool = True
    upload_dir: str = "data/uploads"


@dataclass(frozen=True)
class SummarizationSettings:
    """
    Generative summary client settings.
    """

    adapter: str = "openai"
    model: str = "gpt-4o-mini"
    max_tokens: int = 500
    temperature: float = 0.1
    timeout_seconds: float = 30.0
    api_key: str | None = None
    base_url: str | None = None
    min_content_chars: int = 50


@lru_cache(maxsize=1)
def get_note_ingestion_settings() -> NoteIngestionSettings:
    """
    Return cached note ingestion settings from environment variables.
    """

    return NoteIngestionSettings(
        duplicate_similarity_threshold=min(
            1.0, max(0.0, _get_float_env("NOTES_DUPLICATE_THRESHOLD", 0.8))
        ),
        summarization_enabled=_get_bool_env("NOTES_SUMMARIZATION_ENABLED", True),
        log_row_errors=_get_bool_env("NOTES_LOG_ROW_ERRORS", True),
        upload_dir=_get_str_env("NOTES_UPLOAD_DIR", "data/uploads"),
    )


@lru_cache(maxsize=1)
def get_summarization_settings() -> SummarizationSettings:
    """
    Return cached summarization settings from environment variables.
    """

    return SummarizationSettings(
        adapter=_get_str_env("LLM_ADAPTER", "openai").lower(),
        model=_get_str_env("LLM_MODEL", "gpt-4o-mini"),
        max_tokens=max(1, _get_int_env("LLM_MAX_TOKENS", 500)),
        temperature=max(0.0, _get_float_env("LLM_TEMPERATURE", 0.1)),
        timeout_seconds=max(1.0, _get_float_env("LLM_TIMEOUT_SECONDS", 30.0)),
        api_key=_get_optional_str_env("LLM_API_KEY") or _get_optional_str_env("OPENAI_API_KEY"),
        base_url=_get_optional_str_env("LLM_BASE_URL"),
        min_content_chars=max(0, _get_int_env("NOTES_SUMMARY_MIN_CHARS", 50)),
    )
