"""
Document Store Factory

Lazily creates the configured DocumentStore and shares it per process.
"""

from typing import Optional

from aptiprep.core.config import Settings
from aptiprep.core.documents import DocumentStore


_store: Optional[DocumentStore] = None


def create_document_store(settings: Settings) -> DocumentStore:
    """
    Create a new store for the backend named by ``DOCUMENT_STORE``.

    Args:
        settings: Application settings.

    Returns:
        DocumentStore: A Firestore or SQL store.
    """
    if settings.DOCUMENT_STORE == "sql":
        from aptiprep.core.database import create_engine_for_url
        from aptiprep.core.sql_store import SqlDocumentStore

        engine = create_engine_for_url(settings.DATABASE_URL, echo=settings.is_development)
        return SqlDocumentStore.from_engine(engine)

    from aptiprep.core.firestore_store import FirestoreDocumentStore

    return FirestoreDocumentStore.from_settings(settings)


def get_document_store() -> DocumentStore:
    """Get or create the process-wide document store."""
    global _store
    if _store is None:
        from aptiprep.core.config import settings

        _store = create_document_store(settings)
    return _store


async def close_document_store() -> None:
    """Close the process-wide store, if one was created."""
    global _store
    if _store is not None:
        await _store.close()
        _store = None
