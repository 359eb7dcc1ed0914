"""
app/api/dependencies.py

Shared FastAPI dependencies for request validation.
"""

from __future__ import annotations

from fastapi import Depends, File, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from app.repositories.clinical_note_repository import ClinicalNoteRepository, NotePersistenceGateway
from db.session import get_db

NOTE_FILE_EXTENSIONS = (".csv", ".txt", ".tsv")
NOTE_FILE_CONTENT_TYPES = {
    "text/csv",
    "text/plain",
    "text/tab-separated-values",
    "application/csv",
    "application/vnd.ms-excel",
}


def get_note_upload(file: UploadFile = File(...)) -> UploadFile:
    """
    Validate that the uploaded file is a delimited text file by extension or MIME type.
    """

    filename = (file.filename or "").strip().lower()
    content_type = (file.content_type or "").strip().lower()

    if not filename.endswith(NOTE_FILE_EXTENSIONS) and content_type not in NOTE_FILE_CONTENT_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only delimited text files (.csv, .txt, .tsv) are allowed.",
        )

    return file


def get_note_store(db: Session = Depends(get_db)) -> NotePersistenceGateway:
    """
    Clinical note store bound to the request's database session.
    """

    return ClinicalNoteRepository(db)
