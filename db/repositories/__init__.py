"""
Repository layer exports.
"""

from db.repositories.errors import FileStorageError, StoredFileNotFoundError
from db.repositories.storage import (
    FileSource,
    FileStorageBackend,
    LocalFileStorage,
    StoredFileMetadata,
)

__all__ = [
    "FileSource",
    "FileStorageBackend",
    "FileStorageError",
    "LocalFileStorage",
    "StoredFileMetadata",
    "StoredFileNotFoundError",
]
