"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.clinical_note import ClinicalNote

__all__ = [
    "ClinicalNote",
]
