"""
Document Model

One row per stored document, grouped by collection name.
"""

from datetime import datetime
from typing import Any, Dict

from sqlalchemy import JSON, DateTime, String, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from aptiprep.core.database import Base


class DocumentRecord(Base):
    """
    Generic JSON document row.

    Attributes:
        collection: Collection name (e.g. "companies", "videoProgress").
        doc_id: Document key, unique within its collection.
        data: Document body; JSONB on PostgreSQL, JSON elsewhere.
        created_at: Row creation time.
        updated_at: Last write time.
    """

    __tablename__ = "documents"

    collection: Mapped[str] = mapped_column(
        String(100),
        primary_key=True,
    )
    doc_id: Mapped[str] = mapped_column(
        String(255),
        primary_key=True,
    )
    data: Mapped[Dict[str, Any]] = mapped_column(
        JSON().with_variant(JSONB, "postgresql"),
        nullable=False,
        default=dict,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<DocumentRecord(collection={self.collection}, doc_id={self.doc_id})>"
