"""
Pytest Configuration and Fixtures

Provides reusable async fixtures for testing the Aptiprep Backend.
"""

import copy
from collections import defaultdict
from typing import Any, AsyncGenerator, Dict, List, Mapping, Optional, Sequence, Set
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from aptiprep.core.documents import (
    DocumentSnapshot,
    DocumentStore,
    WriteOp,
    deep_merge,
    resolve_server_timestamps,
    utc_now,
)
from aptiprep.core.errors import AuthError, DocumentNotFoundError, DocumentStoreError
from aptiprep.core.identity import AuthSession, IdentityProvider
from aptiprep.core.sql_store import SqlDocumentStore


# ==================== Test Doubles ====================

class InMemoryDocumentStore(DocumentStore):
    """
    Dict-backed DocumentStore.

    ``batches`` records every committed batch before timestamps are
    resolved. Writes touching a collection in ``failing_collections`` raise
    DocumentStoreError without changing anything.
    """

    def __init__(self):
        self.collections: Dict[str, Dict[str, Dict[str, Any]]] = defaultdict(dict)
        self.batches: List[List[WriteOp]] = []
        self.failing_collections: Set[str] = set()
        self.fail_reads = False

    async def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        if self.fail_reads:
            raise DocumentStoreError("read failed")
        data = self.collections[collection].get(doc_id)
        return copy.deepcopy(data) if data is not None else None

    async def set(self, collection: str, doc_id: str, data: Mapping[str, Any], merge: bool = False) -> None:
        await self.batch_write([WriteOp(collection, doc_id, dict(data), merge=merge)])

    async def update(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        if doc_id not in self.collections[collection]:
            raise DocumentNotFoundError(f"No document to update: {collection}/{doc_id}")
        existing = self.collections[collection][doc_id]
        existing.update(resolve_server_timestamps(dict(data), utc_now()))

    async def query(self, collection: str, filters: Mapping[str, Any]) -> List[DocumentSnapshot]:
        if self.fail_reads:
            raise DocumentStoreError("query failed")
        return [
            DocumentSnapshot(id=doc_id, data=copy.deepcopy(data))
            for doc_id, data in sorted(self.collections[collection].items())
            if all(data.get(key) == value for key, value in filters.items())
        ]

    async def batch_write(self, ops: Sequence[WriteOp]) -> None:
        if any(op.collection in self.failing_collections for op in ops):
            raise DocumentStoreError("batch rejected")
        self.batches.append(list(ops))
        now = utc_now()
        for op in ops:
            data = resolve_server_timestamps(copy.deepcopy(op.data), now)
            existing = self.collections[op.collection].get(op.doc_id)
            if existing is not None and op.merge:
                data = deep_merge(existing, data)
            self.collections[op.collection][op.doc_id] = data


class FakeIdentityProvider(IdentityProvider):
    """IdentityProvider with in-memory accounts and opaque tokens."""

    def __init__(self):
        self.accounts: Dict[str, Dict[str, Any]] = {}
        self.tokens: Dict[str, str] = {}
        self.custom_claims: Dict[str, Dict[str, Any]] = {}
        self.refresh_count = 0

    def add_account(
        self,
        email: str,
        password: str,
        uid: str,
        claims: Optional[Dict[str, Any]] = None,
        display_name: str = "",
    ) -> str:
        """Register an account and return a valid ID token for it."""
        self.accounts[email] = {"password": password, "uid": uid, "display_name": display_name}
        self.custom_claims[uid] = dict(claims or {})
        token = f"token-{uid}"
        self.tokens[token] = email
        return token

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        account = self.accounts.get(email)
        if account is None or account["password"] != password:
            raise AuthError("Invalid email or password")
        return AuthSession(
            uid=account["uid"],
            email=email,
            id_token=f"token-{account['uid']}",
            refresh_token=f"refresh-{account['uid']}",
            display_name=account["display_name"],
        )

    async def refresh(self, session: AuthSession) -> AuthSession:
        self.refresh_count += 1
        return AuthSession(
            uid=session.uid,
            email=session.email,
            id_token=session.id_token,
            refresh_token=session.refresh_token,
        )

    async def verify_id_token(self, id_token: str) -> Dict[str, Any]:
        email = self.tokens.get(id_token)
        if email is None:
            raise AuthError("Invalid or expired session token")
        uid = self.accounts[email]["uid"]
        return {"uid": uid, "email": email, **self.custom_claims.get(uid, {})}

    async def set_custom_claims(self, uid: str, claims: Dict[str, Any]) -> None:
        self.custom_claims[uid] = dict(claims)


# ==================== Store Fixtures ====================

@pytest.fixture
def memory_store() -> InMemoryDocumentStore:
    """Empty in-memory document store."""
    return InMemoryDocumentStore()


@pytest.fixture
def mock_store() -> AsyncMock:
    """
    Create a mock document store.

    Returns:
        AsyncMock configured to behave like DocumentStore.
    """
    store = AsyncMock(spec=DocumentStore)
    store.get = AsyncMock(return_value=None)
    store.set = AsyncMock()
    store.update = AsyncMock()
    store.query = AsyncMock(return_value=[])
    store.batch_write = AsyncMock()
    return store


@pytest_asyncio.fixture
async def sql_store() -> AsyncGenerator[SqlDocumentStore, None]:
    """SqlDocumentStore on a private in-memory SQLite database."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    store = SqlDocumentStore.from_engine(engine)
    await store.create_tables()
    yield store
    await store.close()


# ==================== Identity Fixtures ====================

@pytest.fixture
def identity() -> FakeIdentityProvider:
    """Fake identity provider with no accounts."""
    return FakeIdentityProvider()


# ==================== HTTP Client Fixtures ====================

@pytest.fixture
def mock_httpx_response():
    """
    Factory fixture to create mock httpx responses.

    Usage:
        response = mock_httpx_response(status_code=200, json_data={"key": "value"})
    """
    def _create_response(status_code: int = 200, json_data: dict = None, text: str = ""):
        response = MagicMock()
        response.status_code = status_code
        response.json.return_value = json_data or {}
        response.text = text
        return response
    return _create_response
