"""
SQL Document Store

DocumentStore implementation on async SQLAlchemy. Every document is a row of
the ``documents`` table; a batch is a single transaction.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence

from pydantic_core import to_jsonable_python
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from aptiprep.core.database import init_db, make_session_maker
from aptiprep.core.documents import (
    DocumentSnapshot,
    DocumentStore,
    WriteOp,
    deep_merge,
    resolve_server_timestamps,
    utc_now,
)
from aptiprep.core.errors import DocumentNotFoundError, DocumentStoreError
from aptiprep.models.document import DocumentRecord


class SqlDocumentStore(DocumentStore):
    """
    Document store backed by a relational database.

    Server timestamps are resolved to the write time and, like every other
    datetime, stored as ISO-8601 strings inside the JSON body.
    """

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        engine: Optional[AsyncEngine] = None,
    ):
        self._session_maker = session_maker
        self._engine = engine

    @classmethod
    def from_engine(cls, engine: AsyncEngine) -> "SqlDocumentStore":
        """Create a store bound to ``engine``."""
        return cls(make_session_maker(engine), engine=engine)

    async def create_tables(self) -> None:
        """Create the documents table if it does not exist."""
        if self._engine is None:
            raise DocumentStoreError("Store has no engine to create tables on")
        await init_db(self._engine)

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()

    async def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        try:
            async with self._session_maker() as session:
                record = await session.get(DocumentRecord, (collection, doc_id))
                return dict(record.data) if record is not None else None
        except SQLAlchemyError as e:
            raise DocumentStoreError(f"Failed to read {collection}/{doc_id}: {e}") from e

    async def set(
        self,
        collection: str,
        doc_id: str,
        data: Mapping[str, Any],
        merge: bool = False,
    ) -> None:
        await self.batch_write([WriteOp(collection, doc_id, dict(data), merge=merge)])

    async def update(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        try:
            async with self._session_maker() as session:
                async with session.begin():
                    record = await session.get(DocumentRecord, (collection, doc_id))
                    if record is None:
                        raise DocumentNotFoundError(f"No document to update: {collection}/{doc_id}")
                    record.data = {**record.data, **self._encode(data)}
        except SQLAlchemyError as e:
            raise DocumentStoreError(f"Failed to update {collection}/{doc_id}: {e}") from e

    async def query(self, collection: str, filters: Mapping[str, Any]) -> List[DocumentSnapshot]:
        stmt = select(DocumentRecord).where(DocumentRecord.collection == collection)
        for key, value in filters.items():
            # String equality can be pushed down; other types are checked below
            if isinstance(value, str):
                stmt = stmt.where(DocumentRecord.data[key].as_string() == value)
        stmt = stmt.order_by(DocumentRecord.doc_id)

        try:
            async with self._session_maker() as session:
                result = await session.execute(stmt)
                records = list(result.scalars().all())
        except SQLAlchemyError as e:
            raise DocumentStoreError(f"Failed to query {collection}: {e}") from e

        return [
            DocumentSnapshot(id=record.doc_id, data=dict(record.data))
            for record in records
            if all(record.data.get(key) == value for key, value in filters.items())
        ]

    async def batch_write(self, ops: Sequence[WriteOp]) -> None:
        if not ops:
            return
        try:
            async with self._session_maker() as session:
                async with session.begin():
                    for op in ops:
                        await self._apply(session, op)
        except (SQLAlchemyError, ValueError) as e:
            raise DocumentStoreError(f"Batch of {len(ops)} writes failed: {e}") from e

    async def _apply(self, session: AsyncSession, op: WriteOp) -> None:
        data = self._encode(op.data)
        record = await session.get(DocumentRecord, (op.collection, op.doc_id))

        if record is None:
            session.add(DocumentRecord(collection=op.collection, doc_id=op.doc_id, data=data))
            await session.flush()
        elif op.merge:
            record.data = deep_merge(record.data, data)
        else:
            record.data = data

    @staticmethod
    def _encode(data: Mapping[str, Any]) -> Dict[str, Any]:
        """Resolve server timestamps and convert to JSON-safe values."""
        return to_jsonable_python(resolve_server_timestamps(dict(data), utc_now()))
