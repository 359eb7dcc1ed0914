"""
db/repositories/storage.py

Upload storage for clinical note files.

A stored file is identified by its POSIX path relative to the storage root,
e.g. `notes/2024/03/<hex>_notas.csv`. That identifier is what ingestion
records as `source_file`.
"""

from __future__ import annotations

import hashlib
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from mimetypes import guess_type
from pathlib import Path
from typing import Protocol

from db.repositories.errors import FileStorageError, StoredFileNotFoundError


@dataclass(frozen=True)
class StoredFileMetadata:
    file_name: str
    storage_path: str
    mime_type: str | None
    file_size_bytes: int
    checksum: str
    stored_at: datetime


class FileSource(Protocol):
    """Resolves a file identifier to its decoded text."""

    def read_text(self, file_id: str) -> str:
        ...


class FileStorageBackend(FileSource, Protocol):
    def save(
        self,
        *,
        file_name: str,
        content: bytes,
        content_type: str | None = None,
    ) -> StoredFileMetadata:
        ...

    def delete(self, *, storage_path: str) -> None:
        ...


def _write_atomically(target: Path, content: bytes) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    partial = target.with_name(f".{target.name}.partial")
    try:
        partial.write_bytes(content)
        partial.replace(target)
    except OSError as exc:
        raise FileStorageError(f"Failed to write {target.name} to storage.") from exc
    finally:
        partial.unlink(missing_ok=True)


class LocalFileStorage:
    """
    Filesystem-backed upload storage rooted at `root_dir`.
    """

    def __init__(self, root_dir: str | Path = "data/uploads") -> None:
        self._root_dir = Path(root_dir)

    def save(
        self,
        *,
        file_name: str,
        content: bytes,
        content_type: str | None = None,
    ) -> StoredFileMetadata:
        """
        Store raw upload bytes under a unique, date-partitioned identifier.

        Raises:
            FileStorageError: on an empty file name or a failed write.
        """

        base_name = Path(file_name).name.strip()
        if not base_name:
            raise FileStorageError("Uploaded file has no usable name.")

        stored_at = datetime.now(timezone.utc)
        storage_path = f"notes/{stored_at:%Y/%m}/{uuid.uuid4().hex}_{base_name}"
        _write_atomically(self._resolve(storage_path), content)

        return StoredFileMetadata(
            file_name=base_name,
            storage_path=storage_path,
            mime_type=content_type or guess_type(base_name)[0],
            file_size_bytes=len(content),
            checksum=hashlib.sha256(content).hexdigest(),
            stored_at=stored_at,
        )

    def read_text(self, file_id: str) -> str:
        """
        Return the UTF-8 text of a stored file, without a leading BOM.

        Raises:
            StoredFileNotFoundError: when nothing is stored under `file_id`.
            FileStorageError: when the file cannot be read or decoded.
        """

        target = self._resolve(file_id)
        if not target.is_file():
            raise StoredFileNotFoundError(f"Stored file not found: {file_id}")
        try:
            return target.read_bytes().decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise FileStorageError(f"Stored file is not valid UTF-8: {file_id}") from exc
        except OSError as exc:
            raise FileStorageError(f"Failed to read stored file: {file_id}") from exc

    def delete(self, *, storage_path: str) -> None:
        try:
            self._resolve(storage_path).unlink(missing_ok=True)
        except OSError as exc:
            raise FileStorageError(f"Failed to delete stored file: {storage_path}") from exc

    def _resolve(self, file_id: str) -> Path:
        root = self._root_dir.resolve()
        target = (root / file_id).resolve()
        if root not in target.parents:
            raise FileStorageError(f"File identifier escapes the storage root: {file_id}")
        return target
