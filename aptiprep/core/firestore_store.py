"""
Firestore Document Store

DocumentStore implementation on Cloud Firestore's async client.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence

from google.api_core import exceptions as gcp_exceptions
from google.cloud import firestore
from google.cloud.firestore_v1 import FieldFilter

from aptiprep.core.config import Settings
from aptiprep.core.documents import (
    SERVER_TIMESTAMP,
    DocumentSnapshot,
    DocumentStore,
    WriteOp,
    resolve_server_timestamps,
)
from aptiprep.core.errors import DocumentNotFoundError, DocumentStoreError
from aptiprep.core.firebase import get_firebase_app


class FirestoreDocumentStore(DocumentStore):
    """Document store backed by Cloud Firestore."""

    def __init__(self, client: firestore.AsyncClient):
        self._client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "FirestoreDocumentStore":
        """
        Build a store from the Firebase service credential.

        Args:
            settings: Application settings (project id, credential path).
        """
        app = get_firebase_app(settings)
        client = firestore.AsyncClient(
            project=settings.FIREBASE_PROJECT_ID,
            credentials=app.credential.get_credential(),
        )
        return cls(client)

    def new_id(self, collection: str) -> str:
        return self._client.collection(collection).document().id

    async def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        try:
            snapshot = await self._client.collection(collection).document(doc_id).get()
        except gcp_exceptions.GoogleAPICallError as e:
            raise DocumentStoreError(f"Failed to read {collection}/{doc_id}: {e}") from e

        if not snapshot.exists:
            return None
        return snapshot.to_dict()

    async def set(
        self,
        collection: str,
        doc_id: str,
        data: Mapping[str, Any],
        merge: bool = False,
    ) -> None:
        ref = self._client.collection(collection).document(doc_id)
        try:
            await ref.set(self._encode(data), merge=merge)
        except gcp_exceptions.GoogleAPICallError as e:
            raise DocumentStoreError(f"Failed to write {collection}/{doc_id}: {e}") from e

    async def update(self, collection: str, doc_id: str, data: Mapping[str, Any]) -> None:
        ref = self._client.collection(collection).document(doc_id)
        try:
            await ref.update(self._encode(data))
        except gcp_exceptions.NotFound as e:
            raise DocumentNotFoundError(f"No document to update: {collection}/{doc_id}") from e
        except gcp_exceptions.GoogleAPICallError as e:
            raise DocumentStoreError(f"Failed to update {collection}/{doc_id}: {e}") from e

    async def query(self, collection: str, filters: Mapping[str, Any]) -> List[DocumentSnapshot]:
        query = self._client.collection(collection)
        for key, value in filters.items():
            query = query.where(filter=FieldFilter(key, "==", value))

        try:
            return [
                DocumentSnapshot(id=snapshot.id, data=snapshot.to_dict())
                async for snapshot in query.stream()
            ]
        except gcp_exceptions.GoogleAPICallError as e:
            raise DocumentStoreError(f"Failed to query {collection}: {e}") from e

    async def batch_write(self, ops: Sequence[WriteOp]) -> None:
        if not ops:
            return
        batch = self._client.batch()
        for op in ops:
            ref = self._client.collection(op.collection).document(op.doc_id)
            batch.set(ref, self._encode(op.data), merge=op.merge)

        try:
            await batch.commit()
        except gcp_exceptions.GoogleAPICallError as e:
            raise DocumentStoreError(f"Batch of {len(ops)} writes failed: {e}") from e

    @staticmethod
    def _encode(data: Mapping[str, Any]) -> Dict[str, Any]:
        """Swap the backend-neutral timestamp sentinel for Firestore's own."""
        return resolve_server_timestamps(dict(data), firestore.SERVER_TIMESTAMP)
