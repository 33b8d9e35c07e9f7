"""
Aptiprep Backend - Models Module

SQLAlchemy models for the SQL document store.
Import Base for Alembic migrations.
"""

from aptiprep.core.database import Base

from aptiprep.models.document import DocumentRecord

__all__ = [
    "Base",
    "DocumentRecord",
]
