"""create clinical_notes table

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 09:00:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "clinical_notes",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("patient_id", sa.Text(), nullable=False),
        sa.Column("note_date", sa.Date(), nullable=False),
        sa.Column("clinician", sa.String(length=255), nullable=False),
        sa.Column("specialty", sa.String(length=120), nullable=False),
        sa.Column("visit_type", sa.String(length=120), nullable=False),
        sa.Column("original_content", sa.Text(), nullable=False),
        sa.Column("cleaned_content", sa.Text(), nullable=False),
        sa.Column("diagnoses", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("medications", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("keywords", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("ai_summary", sa.Text(), nullable=False),
        sa.Column(
            "source_file",
            sa.String(length=1024),
            nullable=False,
            comment="Identifier of the uploaded file the note came from",
        ),
        sa.Column(
            "source_row",
            sa.Integer(),
            nullable=False,
            comment="1-indexed line in the source file; the header is line 1",
        ),
        sa.Column("ingested_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_clinical_notes"),
    )
    op.create_index("ix_clinical_notes_patient_id", "clinical_notes", ["patient_id"], unique=False)
    op.create_index("ix_clinical_notes_note_date", "clinical_notes", ["note_date"], unique=False)
    op.create_index(
        "ix_clinical_notes_patient_id_note_date",
        "clinical_notes",
        ["patient_id", "note_date"],
        unique=False,
    )
    op.create_index("ix_clinical_notes_source_file", "clinical_notes", ["source_file"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_clinical_notes_source_file", table_name="clinical_notes")
    op.drop_index("ix_clinical_notes_patient_id_note_date", table_name="clinical_notes")
    op.drop_index("ix_clinical_notes_note_date", table_name="clinical_notes")
    op.drop_index("ix_clinical_notes_patient_id", table_name="clinical_notes")
    op.drop_table("clinical_notes")
