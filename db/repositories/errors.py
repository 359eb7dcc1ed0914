"""
Repository-layer exceptions for upload/storage flows.
"""

from __future__ import annotations


class FileStorageError(Exception):
    """Raised when storing, reading or deleting an uploaded file fails."""


class StoredFileNotFoundError(FileStorageError):
    """Raised when a file identifier does not resolve to a stored file."""
