"""
app/api/routers/note_ingestion.py

Clinical note ingestion HTTP endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, UploadFile, status

from app.api.dependencies import get_note_store, get_note_upload
from app.config import get_note_ingestion_settings
from app.domain.errors import NoteFileFormatError
from app.repositories.clinical_note_repository import NotePersistenceGateway
from app.schemas.note_ingestion import NoteIngestionResultResponse
from app.services.note_ingestion_service import NoteIngestionService, get_note_ingestion_service
from db.repositories.errors import FileStorageError
from db.repositories.storage import FileStorageBackend, LocalFileStorage

router = APIRouter(prefix="/notes", tags=["ingestion"])


def get_upload_storage() -> FileStorageBackend:
    return LocalFileStorage(get_note_ingestion_settings().upload_dir)


@router.post("/ingest/{file_id:path}", response_model=NoteIngestionResultResponse, response_model_by_alias=True)
def ingest_stored_file(
    file_id: str,
    store: NotePersistenceGateway = Depends(get_note_store),
    ingestion_service: NoteIngestionService = Depends(get_note_ingestion_service),
) -> NoteIngestionResultResponse:
    """
    Ingest a file that is already present in upload storage.
    """

    try:
        result = ingestion_service.ingest_file(file_id, store=store)
    except NoteFileFormatError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    return NoteIngestionResultResponse.from_result(result)


@router.post("/upload", response_model=NoteIngestionResultResponse, response_model_by_alias=True)
def upload_note_file(
    file: UploadFile = Depends(get_note_upload),
    store: NotePersistenceGateway = Depends(get_note_store),
    storage: FileStorageBackend = Depends(get_upload_storage),
    ingestion_service: NoteIngestionService = Depends(get_note_ingestion_service),
) -> NoteIngestionResultResponse:
    """
    Store an uploaded note file, then ingest it.
    """

    try:
        content = file.file.read()
        try:
            raw_text = content.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Note files must be UTF-8 encoded.",
            ) from exc

        try:
            stored = storage.save(
                file_name=file.filename or "notes.csv",
                content=content,
                content_type=file.content_type,
            )
        except FileStorageError as exc:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Unable to store uploaded file.",
            ) from exc

        try:
            result = ingestion_service.ingest(stored.storage_path, raw_text, store=store)
        except NoteFileFormatError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(exc),
            ) from exc
    finally:
        file.file.close()

    return NoteIngestionResultResponse.from_result(result)
