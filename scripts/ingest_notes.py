"""
Ingest a local clinical notes file from CLI.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from app.domain.errors import NoteFileFormatError
from app.repositories.clinical_note_repository import ClinicalNoteRepository
from app.services.note_ingestion_service import get_note_ingestion_service
from db.session import SessionLocal


def main() -> int:
    parser = argparse.ArgumentParser(description="Ingest one delimited clinical notes file.")
    parser.add_argument("path", help="Path to the notes file (UTF-8).")
    parser.add_argument(
        "--file-id",
        dest="file_id",
        default=None,
        help="Identifier recorded on each note. Defaults to the file name.",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").strip().upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    path = Path(args.path)
    try:
        raw_text = path.read_bytes().decode("utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Cannot read {path}: {exc}", file=sys.stderr)
        return 2

    service = get_note_ingestion_service()
    with SessionLocal() as db:
        try:
            result = service.ingest(args.file_id or path.name, raw_text, store=ClinicalNoteRepository(db))
        except NoteFileFormatError as exc:
            print(str(exc), file=sys.stderr)
            return 2

    payload = {**result.to_dict(), "skippedDuplicates": result.skipped_duplicates}
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0 if result.error_count == 0 else 1


if __name__ == "__main__":
    raise SystemExit(main())
