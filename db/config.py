"""
db/config.py

Environment loading and database URL resolution for the note store.
"""

from __future__ import annotations

import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
ENV_FILES = (".env", ".env.local")

_CLOUD_ENVIRONMENTS = frozenset({"prod", "production", "staging", "cloud"})
_POSTGRES_PREFIXES = ("postgres://", "postgresql://")
_PSYCOPG_PREFIX = "postgresql+psycopg://"


def _parse_env_line(raw_line: str) -> tuple[str, str] | None:
    line = raw_line.strip()
    if not line or line.startswith("#"):
        return None
    if line.startswith("export "):
        line = line[len("export "):].lstrip()
    key, separator, value = line.partition("=")
    key = key.strip()
    if not separator or not key:
        return None
    return key, value.strip().strip("\"'")


def load_env_files(root: Path = PROJECT_ROOT) -> None:
    """
    Copy KEY=VALUE pairs from `.env` and `.env.local` into os.environ.

    Variables already set in the process environment win over file values.
    """

    for filename in ENV_FILES:
        env_path = root / filename
        if not env_path.is_file():
            continue
        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            parsed = _parse_env_line(raw_line)
            if parsed is not None:
                os.environ.setdefault(*parsed)


def normalize_postgres_url(url: str) -> str:
    """Rewrite plain postgres URLs to the psycopg (v3) SQLAlchemy driver."""

    for prefix in _POSTGRES_PREFIXES:
        if url.startswith(prefix):
            return _PSYCOPG_PREFIX + url[len(prefix):]
    return url


def resolve_database_url() -> str:
    """
    Pick the note store URL from the environment.

    DATABASE_URL always wins. CLOUD_DATABASE_URL is used only when ENVIRONMENT
    names a cloud-like stage; LOCAL_DATABASE_URL is the last resort.

    Raises:
        RuntimeError: when none of them is set.
    """

    load_env_files()

    environment = os.getenv("ENVIRONMENT", "local").strip().lower()
    candidates = [os.getenv("DATABASE_URL")]
    if environment in _CLOUD_ENVIRONMENTS:
        candidates.append(os.getenv("CLOUD_DATABASE_URL"))
    candidates.append(os.getenv("LOCAL_DATABASE_URL"))

    for candidate in candidates:
        if candidate and candidate.strip():
            return normalize_postgres_url(candidate.strip())

    raise RuntimeError(
        "No database URL configured for the clinical note store. Set DATABASE_URL, "
        "or configure LOCAL_DATABASE_URL / CLOUD_DATABASE_URL."
    )
