"""
app/mappers/column_mapper.py

Column mapping from arbitrary note-file headers to the standard note fields.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Sequence

STANDARD_FIELDS: tuple[str, ...] = (
    "patient_id",
    "note_date",
    "clinician",
    "specialty",
    "visit_type",
    "content",
    "diagnoses",
    "medications",
)

REQUIRED_FIELDS: tuple[str, ...] = (
    "patient_id",
    "note_date",
    "content",
)

DEFAULT_COLUMN_ALIASES: Mapping[str, tuple[str, ...]] = MappingProxyType(
    {
        "patient_id": ("id_paciente", "paciente_id", "patient_id", "id", "id_pac", "paciente"),
        "note_date": ("fecha_nota", "fecha", "date", "fecha_consulta", "fecha_atencion"),
        "clinician": ("medico", "doctor", "physician", "médico", "profesional"),
        "specialty": ("especialidad", "specialty", "especiality", "area"),
        "visit_type": ("tipo_consulta", "tipo", "type", "consultation_type", "modalidad"),
        "content": (
            "contenido_nota",
            "nota",
            "note",
            "content",
            "contenido",
            "observaciones",
            "descripcion",
        ),
        "diagnoses": ("diagnosticos", "diagnósticos", "diagnosis", "diagnostico", "dx"),
        "medications": (
            "medicamentos",
            "medications",
            "drugs",
            "fármacos",
            "farmacos",
            "tratamiento",
        ),
    }
)


def normalize_header(header: str) -> str:
    return header.strip().lower()


@dataclass(frozen=True)
class ColumnMapping:
    """
    Resolved binding between standard note fields and source headers.

    Fields without a matching header are simply absent.
    """

    field_to_source: Mapping[str, str]
    source_headers: tuple[str, ...]

    def source_for(self, field_name: str) -> str | None:
        return self.field_to_source.get(field_name)

    @property
    def unmapped_fields(self) -> tuple[str, ...]:
        return tuple(name for name in STANDARD_FIELDS if name not in self.field_to_source)


class ColumnMapper:
    """
    Maps incoming file columns onto the standard note schema.

    A header matches a field when its normalized form contains one of the
    field's aliases, or an alias contains it. Fields are resolved in
    STANDARD_FIELDS order and each binds to the first matching header.
    """

    def __init__(self, aliases: Mapping[str, Sequence[str]] | None = None) -> None:
        alias_map = aliases or DEFAULT_COLUMN_ALIASES
        self._aliases: dict[str, tuple[str, ...]] = {
            field_name: tuple(alias.strip().lower() for alias in values)
            for field_name, values in alias_map.items()
        }

    def build_mapping(self, headers: Sequence[str]) -> ColumnMapping:
        """
        Resolve the standard-field-to-header mapping for one file.
        """

        mapping: dict[str, str] = {}
        for field_name in STANDARD_FIELDS:
            aliases = self._aliases.get(field_name, ())
            for header in headers:
                if self._header_matches(normalize_header(header), aliases):
                    mapping[field_name] = header
                    break

        return ColumnMapping(
            field_to_source=MappingProxyType(mapping),
            source_headers=tuple(headers),
        )

    @staticmethod
    def map_row(
        *,
        raw_row: Mapping[str, str | None],
        mapping: ColumnMapping,
    ) -> dict[str, str | None]:
        """
        Convert a source row into standard raw field values.
        """

        mapped: dict[str, str | None] = {}
        for field_name in STANDARD_FIELDS:
            source_column = mapping.source_for(field_name)
            mapped[field_name] = raw_row.get(source_column) if source_column is not None else None
        return mapped

    @staticmethod
    def _header_matches(normalized: str, aliases: Sequence[str]) -> bool:
        if not normalized:
            return False
        return any(alias in normalized or normalized in alias for alias in aliases)
