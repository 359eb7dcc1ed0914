"""
db/session.py

Engine and session plumbing for the clinical note store.

Nothing connects at import time: the engine is built on first use, so code
paths that never touch the database (tests, the mock summarizer, `--help`)
need no database URL.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from db.config import resolve_database_url

_POOL_DEFAULTS = {
    "DB_POOL_SIZE": 5,
    "DB_MAX_OVERFLOW": 10,
    "DB_POOL_RECYCLE": 1800,
}


def _pool_setting(name: str) -> int:
    raw_value = os.getenv(name, "").strip()
    if not raw_value:
        return _POOL_DEFAULTS[name]
    try:
        return int(raw_value)
    except ValueError:
        return _POOL_DEFAULTS[name]


def create_db_engine(database_url: str | None = None) -> Engine:
    """
    Build a pooled PostgreSQL engine.

    Raises:
        RuntimeError: when no URL is configured or it is not PostgreSQL.
    """

    url = database_url or resolve_database_url()
    if not url.startswith("postgresql"):
        raise RuntimeError("The clinical note store requires a PostgreSQL URL.")

    return create_engine(
        url,
        echo=os.getenv("SQL_ECHO", "").strip().lower() in {"1", "true", "yes", "on"},
        pool_pre_ping=True,
        pool_size=_pool_setting("DB_POOL_SIZE"),
        max_overflow=_pool_setting("DB_MAX_OVERFLOW"),
        pool_recycle=_pool_setting("DB_POOL_RECYCLE"),
    )


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    return create_db_engine()


@lru_cache(maxsize=1)
def get_session_factory() -> sessionmaker[Session]:
    return sessionmaker(
        bind=get_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


def SessionLocal() -> Session:
    """Open a new session on the shared engine."""
    return get_session_factory()()


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency yielding one session per request."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
