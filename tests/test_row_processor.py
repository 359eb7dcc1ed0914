"""
tests/test_row_processor.py

Pytest unit tests for single-row validation, normalization and persistence.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

import pytest

from app.domain.clinical_note import FailedRow, PersistedRow, SkippedDuplicate
from app.mappers.column_mapper import ColumnMapper
from app.services.duplicate_detector import DuplicateDetector
from app.services.row_processor import RowProcessor, split_list_field

HEADERS = [
    "ID_Paciente",
    "Fecha",
    "Medico",
    "Especialidad",
    "Tipo_Consulta",
    "Contenido_Nota",
    "Diagnosticos",
    "Medicamentos",
]
FIXED_NOW = datetime(2024, 3, 10, 12, 0, tzinfo=timezone.utc)
FIXED_ID = uuid.UUID("00000000-0000-4000-8000-000000000001")


def _row(**overrides: str) -> dict[str, str]:
    row = {
        "ID_Paciente": "P-001",
        "Fecha": "05/03/2024",
        "Medico": "Dr. Pérez",
        "Especialidad": "Cardiología",
        "Tipo_Consulta": "control",
        "Contenido_Nota": "Paciente   presenta hipertensión arterial severa!!",
        "Diagnosticos": "Hipertensión; Dislipidemia",
        "Medicamentos": "Enalapril|Atorvastatina",
    }
    row.update(overrides)
    return row


@pytest.fixture()
def mapping():
    return ColumnMapper().build_mapping(HEADERS)


@pytest.fixture()
def processor(store, summarizer) -> RowProcessor:
    return RowProcessor(
        store=store,
        duplicate_detector=DuplicateDetector(store),
        summarizer=summarizer,
        id_factory=lambda: FIXED_ID,
        clock=lambda: FIXED_NOW,
    )


class TestSplitListField:
    def test_mixed_separators(self) -> None:
        assert split_list_field("A; B,C | D") == ["A", "B", "C", "D"]

    def test_drops_empty_items_and_keeps_repeats(self) -> None:
        assert split_list_field(";A;;A;") == ["A", "A"]

    def test_empty_values(self) -> None:
        assert split_list_field("") == []
        assert split_list_field(None) == []


class TestRowProcessor:
    def test_valid_row_is_normalized_and_persisted(self, processor, mapping, store, summarizer) -> None:
        outcome = processor.process(_row(), mapping, file_id="notas.csv", row_number=2)

        assert isinstance(outcome, PersistedRow)
        record = outcome.record
        assert record.id == FIXED_ID
        assert record.patient_id == "P-001"
        assert record.note_date == "2024-03-05"
        assert record.clinician == "Dr. Pérez"
        assert record.specialty == "Cardiología"
        assert record.visit_type == "control"
        assert record.original_content == "Paciente   presenta hipertensión arterial severa!!"
        assert record.cleaned_content == "Paciente presenta hipertensión arterial severa"
        assert record.diagnoses == ["Hipertensión", "Dislipidemia"]
        assert record.medications == ["Enalapril", "Atorvastatina"]
        assert record.keywords == ["paciente", "presenta", "hipertensión", "arterial", "severa"]
        assert record.ai_summary == "Resumen de prueba"
        assert record.source_file == "notas.csv"
        assert record.source_row == 2
        assert record.ingested_at == FIXED_NOW
        assert record.status == "procesado"
        assert store.records == {FIXED_ID: record}
        assert summarizer.calls == ["Paciente presenta hipertensión arterial severa"]

    def test_optional_fields_get_defaults(self, processor, mapping) -> None:
        row = _row(Medico="", Especialidad="  ", Tipo_Consulta="", Diagnosticos="", Medicamentos="")

        outcome = processor.process(row, mapping, file_id="notas.csv", row_number=2)

        assert isinstance(outcome, PersistedRow)
        assert outcome.record.clinician == "No especificado"
        assert outcome.record.specialty == "General"
        assert outcome.record.visit_type == "consulta_externa"
        assert outcome.record.diagnoses == []
        assert outcome.record.medications == []

    def test_unbound_optional_columns_get_defaults(self, processor, store) -> None:
        mapping = ColumnMapper().build_mapping(["ID_Paciente", "Fecha", "Contenido"])
        row = {"ID_Paciente": "P-001", "Fecha": "2024-03-05", "Contenido": "Control rutinario"}

        outcome = processor.process(row, mapping, file_id="notas.csv", row_number=2)

        assert isinstance(outcome, PersistedRow)
        assert outcome.record.clinician == "No especificado"
        assert len(store.records) == 1

    def test_missing_required_fields_are_listed(self, processor, mapping, store) -> None:
        row = _row(ID_Paciente="  ", Contenido_Nota="")

        outcome = processor.process(row, mapping, file_id="notas.csv", row_number=3)

        assert isinstance(outcome, FailedRow)
        assert outcome.error.row_number == 3
        assert outcome.error.message == "Missing required fields: patient_id, content."
        assert outcome.error.raw_row == row
        assert store.put_attempts == 0

    def test_unbound_required_field_reports_missing(self, processor, store) -> None:
        mapping = ColumnMapper().build_mapping(["ID_Paciente", "Contenido"])
        row = {"ID_Paciente": "P-001", "Contenido": "Control"}

        outcome = processor.process(row, mapping, file_id="notas.csv", row_number=2)

        assert isinstance(outcome, FailedRow)
        assert outcome.error.message == "Missing required fields: note_date."

    def test_bad_date_fails_row(self, processor, mapping, store) -> None:
        outcome = processor.process(_row(Fecha="31/31/2024"), mapping, file_id="notas.csv", row_number=4)

        assert isinstance(outcome, FailedRow)
        assert outcome.error.row_number == 4
        assert outcome.error.message == "Unrecognized date format: 31/31/2024"
        assert store.put_attempts == 0

    def test_duplicate_of_stored_note_is_skipped(self, processor, mapping, store, make_record) -> None:
        stored = make_record(content="Paciente presenta hipertensión arterial severa")
        store.records[stored.id] = stored

        outcome = processor.process(_row(), mapping, file_id="notas.csv", row_number=2)

        assert outcome == SkippedDuplicate(patient_id="P-001", note_date="2024-03-05", row_number=2)
        assert store.put_attempts == 0
        assert list(store.records) == [stored.id]

    def test_summary_failure_keeps_row(self, processor, mapping, summarizer, caplog) -> None:
        summarizer.error = TimeoutError("llm timeout")

        outcome = processor.process(_row(), mapping, file_id="notas.csv", row_number=2)

        assert isinstance(outcome, PersistedRow)
        assert outcome.record.ai_summary == ""
        assert "note_summary_failed" in caplog.text

    def test_without_summarizer_summary_is_empty(self, store, mapping) -> None:
        processor = RowProcessor(store=store, duplicate_detector=DuplicateDetector(store))

        outcome = processor.process(_row(), mapping, file_id="notas.csv", row_number=2)

        assert isinstance(outcome, PersistedRow)
        assert outcome.record.ai_summary == ""

    def test_persistence_failure_fails_row(self, processor, mapping, store) -> None:
        store.failing_patients.add("P-001")

        outcome = processor.process(_row(), mapping, file_id="notas.csv", row_number=5)

        assert isinstance(outcome, FailedRow)
        assert outcome.error.row_number == 5
        assert outcome.error.message == f"Failed to persist clinical note {FIXED_ID}."

    def test_existing_id_counts_as_persisted(self, processor, mapping, store, make_record) -> None:
        existing = make_record(record_id=FIXED_ID, patient_id="P-999")
        store.records[FIXED_ID] = existing

        outcome = processor.process(_row(), mapping, file_id="notas.csv", row_number=2)

        assert isinstance(outcome, PersistedRow)
        assert store.records[FIXED_ID] is existing
        assert store.put_attempts == 1
