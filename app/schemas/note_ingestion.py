"""
app/schemas/note_ingestion.py

Response schemas for clinical note ingestion endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from app.domain.clinical_note import IngestionResult


class RowErrorResponse(BaseModel):
    """
    API response model for one failed row.
    """

    model_config = ConfigDict(populate_by_name=True)

    row: int = Field(..., ge=1)
    raw_row_data: dict[str, str] = Field(default_factory=dict, alias="rawRowData")
    message: str


class NoteIngestionResultResponse(BaseModel):
    """
    API response model for one ingested file.
    """

    model_config = ConfigDict(populate_by_name=True)

    file: str
    processed_count: int = Field(..., ge=0, alias="processedCount")
    error_count: int = Field(..., ge=0, alias="errorCount")
    errors: list[RowErrorResponse] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: IngestionResult) -> "NoteIngestionResultResponse":
        return cls.model_validate(result.to_dict())
