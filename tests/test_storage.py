"""
tests/test_storage.py

Local upload storage used as the ingestion file source.
"""

from __future__ import annotations

import hashlib

import pytest

from db.repositories.errors import FileStorageError, StoredFileNotFoundError
from db.repositories.storage import LocalFileStorage


class TestLocalFileStorage:
    def test_save_then_read_back(self, tmp_path) -> None:
        storage = LocalFileStorage(tmp_path)
        content = "paciente_id,nota\nP-1,Dolor torácico\n".encode("utf-8")

        metadata = storage.save(file_name="notas.csv", content=content, content_type="text/csv")

        assert metadata.file_name == "notas.csv"
        assert metadata.storage_path.startswith("notes/")
        assert metadata.storage_path.endswith("_notas.csv")
        assert metadata.mime_type == "text/csv"
        assert metadata.file_size_bytes == len(content)
        assert metadata.checksum == hashlib.sha256(content).hexdigest()
        assert (tmp_path / metadata.storage_path).is_file()
        assert storage.read_text(metadata.storage_path) == "paciente_id,nota\nP-1,Dolor torácico\n"

    def test_directory_components_are_stripped_from_names(self, tmp_path) -> None:
        storage = LocalFileStorage(tmp_path)

        metadata = storage.save(file_name="../../etc/notas.csv", content=b"x")

        assert metadata.file_name == "notas.csv"
        assert ".." not in metadata.storage_path

    def test_blank_file_name_is_rejected(self, tmp_path) -> None:
        with pytest.raises(FileStorageError):
            LocalFileStorage(tmp_path).save(file_name="   ", content=b"x")

    def test_read_strips_byte_order_mark(self, tmp_path) -> None:
        (tmp_path / "bom.csv").write_bytes("id,nota\n".encode("utf-8-sig"))

        assert LocalFileStorage(tmp_path).read_text("bom.csv") == "id,nota\n"

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(StoredFileNotFoundError):
            LocalFileStorage(tmp_path).read_text("notes/ausente.csv")

    def test_invalid_utf8_is_a_storage_error(self, tmp_path) -> None:
        (tmp_path / "latin1.csv").write_bytes("nota\nPérez\n".encode("latin-1"))

        with pytest.raises(FileStorageError):
            LocalFileStorage(tmp_path).read_text("latin1.csv")

    def test_identifiers_cannot_escape_the_root(self, tmp_path) -> None:
        root = tmp_path / "uploads"
        root.mkdir()
        (tmp_path / "secret.csv").write_text("id\n")

        with pytest.raises(FileStorageError):
            LocalFileStorage(root).read_text("../secret.csv")

    def test_delete_removes_file_and_ignores_missing(self, tmp_path) -> None:
        storage = LocalFileStorage(tmp_path)
        metadata = storage.save(file_name="notas.csv", content=b"id\n")

        storage.delete(storage_path=metadata.storage_path)
        storage.delete(storage_path=metadata.storage_path)

        assert not (tmp_path / metadata.storage_path).exists()
