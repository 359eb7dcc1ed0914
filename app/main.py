"""
app/main.py

FastAPI entry point for the clinical notes ingestion service.

Startup order: environment validation, logging, then (inside the lifespan)
database reachability and schema checks. Nothing is auto-migrated.
"""

from __future__ import annotations

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from app.config import get_note_ingestion_settings, get_summarization_settings

logger = logging.getLogger(__name__)

DATABASE_URL_ENV_VARS = ("DATABASE_URL", "CLOUD_DATABASE_URL", "LOCAL_DATABASE_URL")
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _validate_env() -> None:
    """
    Collect every configuration problem and fail once with all of them.

    Raises:
        RuntimeError: listing each missing or invalid setting.
    """

    from db.config import load_env_files

    load_env_files()
    problems: list[str] = []

    if not any(os.getenv(name, "").strip() for name in DATABASE_URL_ENV_VARS):
        problems.append(
            "No database URL configured. Set one of " + ", ".join(DATABASE_URL_ENV_VARS) + "."
        )

    ingestion = get_note_ingestion_settings()
    if ingestion.summarization_enabled:
        summarization = get_summarization_settings()
        if summarization.adapter != "mock" and not summarization.api_key:
            problems.append(
                "LLM API key is not set. Provide LLM_API_KEY or OPENAI_API_KEY, "
                "set LLM_ADAPTER=mock, or disable summaries with "
                "NOTES_SUMMARIZATION_ENABLED=false."
            )

    upload_dir = Path(ingestion.upload_dir)
    if upload_dir.exists() and not upload_dir.is_dir():
        problems.append(f"NOTES_UPLOAD_DIR={upload_dir} exists and is not a directory.")

    if problems:
        raise RuntimeError(
            "Startup validation failed:\n" + "\n".join(f"  - {problem}" for problem in problems)
        )


def _configure_logging() -> None:
    level_name = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)


def _check_db() -> None:
    """Run SELECT 1 against the note store."""
    from sqlalchemy import text
    from sqlalchemy.exc import SQLAlchemyError

    from db.session import SessionLocal

    try:
        with SessionLocal() as session:
            session.execute(text("SELECT 1"))
    except (SQLAlchemyError, RuntimeError) as exc:
        raise RuntimeError("Clinical note database is unreachable.") from exc


def _check_schema() -> None:
    """
    Fail startup when a mapped table is missing from the database.

    Run `alembic upgrade head` to fix.
    """
    from sqlalchemy import inspect as sa_inspect

    import db.models  # noqa: F401  registers ORM models on Base.metadata
    from db.base import Base
    from db.session import get_engine

    existing = set(sa_inspect(get_engine()).get_table_names())
    missing = sorted(set(Base.metadata.tables) - existing)
    if missing:
        logger.critical(
            "Tables missing from the database: %s. Run 'alembic upgrade head' and restart.",
            ", ".join(missing),
        )
        raise RuntimeError(f"Database schema is missing tables: {', '.join(missing)}.")


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    _check_db()
    logger.info("Database connectivity confirmed")
    _check_schema()
    logger.info("Database schema validated")
    yield


def create_app() -> FastAPI:
    """
    Build the FastAPI application with the note ingestion routes.
    """

    _validate_env()
    _configure_logging()

    application = FastAPI(
        title="Clinical Notes Ingestion API",
        version="1.0.0",
        lifespan=_lifespan,
    )

    from app.api.routers import note_ingestion_router

    application.include_router(note_ingestion_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()
