"""
Document Store Contract

Backend-neutral interface for the document database used by the seeding
workflow and the progress library. Concrete stores live in
``firestore_store`` (Cloud Firestore) and ``sql_store`` (async SQLAlchemy).
"""

import abc
import secrets
import string
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence


# Firestore auto-ids are 20 characters from this alphabet
_ID_ALPHABET = string.ascii_letters + string.digits
_ID_LENGTH = 20


class _ServerTimestamp:
    """Sentinel replaced by the store with its own write time."""

    _instance: Optional["_ServerTimestamp"] = None

    def __new__(cls) -> "_ServerTimestamp":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"

    # Copies must stay identical to the singleton
    def __copy__(self) -> "_ServerTimestamp":
        return self

    def __deepcopy__(self, memo: Dict[int, Any]) -> "_ServerTimestamp":
        return self


SERVER_TIMESTAMP = _ServerTimestamp()


@dataclass(frozen=True)
class DocumentSnapshot:
    """A stored document together with its key."""
    id: str
    data: Dict[str, Any]


@dataclass(frozen=True)
class WriteOp:
    """A single write inside a batch."""
    collection: str
    doc_id: str
    data: Dict[str, Any] = field(default_factory=dict)
    merge: bool = False


def generate_document_id() -> str:
    """Generate a random 20-character document id."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))


def deep_merge(base: Mapping[str, Any], updates: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Merge ``updates`` into a copy of ``base``.

    Nested maps are merged key by key; every other value in ``updates``
    replaces the existing one.
    """
    merged = dict(base)
    for key, value in updates.items():
        existing = merged.get(key)
        if isinstance(existing, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(existing, value)
        else:
            merged[key] = value
    return merged


def resolve_server_timestamps(data: Any, replacement: Any) -> Any:
    """Recursively replace every ``SERVER_TIMESTAMP`` in ``data``."""
    if data is SERVER_TIMESTAMP:
        return replacement
    if isinstance(data, Mapping):
        return {key: resolve_server_timestamps(value, replacement) for key, value in data.items()}
    if isinstance(data, list):
        return [resolve_server_timestamps(item, replacement) for item in data]
    return data


class DocumentStore(abc.ABC):
    """
    Abstract document store.

    Collections hold JSON-like documents keyed by string ids. Only equality
    filters are supported by :meth:`query`.
    """

    def new_id(self, collection: str) -> str:
        """Allocate a fresh document id for ``collection``."""
        return generate_document_id()

    @abc.abstractmethod
    async def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        """Return the document body, or None if it does not exist."""

    @abc.abstractmethod
    async def set(
        self,
        collection: str,
        doc_id: str,
        data: Mapping[str, Any],
        merge: bool = False,
    ) -> None:
        """Create or overwrite a document; with ``merge`` keep unspecified fields."""

    @abc.abstractmethod
    async def update(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        """
        Update fields of an existing document.

        Raises:
            DocumentNotFoundError: If the document does not exist.
        """

    @abc.abstractmethod
    async def query(self, collection: str, filters: Mapping[str, Any]) -> List[DocumentSnapshot]:
        """Return every document whose top-level fields equal ``filters``."""

    @abc.abstractmethod
    async def batch_write(self, ops: Sequence[WriteOp]) -> None:
        """Commit all ``ops`` atomically: either every write lands or none does."""

    async def close(self) -> None:
        """Release any connections held by the store."""
        return None


def utc_now() -> datetime:
    """Current UTC time, used where the client stamps its own time."""
    return datetime.now(timezone.utc)
