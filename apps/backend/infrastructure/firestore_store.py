"""
Document store access for the Firestore backfill.

The runner only needs two operations: stream every document of a collection
and merge a sparse patch into one document. `FirestoreDocumentStore` maps them
onto the Firebase Admin Firestore client.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, Optional, Protocol, Tuple

from config import settings

logger = logging.getLogger(__name__)


class DocumentStore(Protocol):
    def list_documents(self, collection: str) -> Iterator[Tuple[str, Dict[str, Any]]]:
        ...

    def update_partial(self, collection: str, document_id: str, patch: Dict[str, Any]) -> None:
        ...


def create_firestore_client():
    """Return a Firestore client bound to the already-initialized Firebase Admin app."""
    if not bool(getattr(settings, "FIREBASE_READY", False)):
        raise RuntimeError("FIREBASE_READY is false; configure Firebase Admin first.")

    from firebase_admin import firestore

    return firestore.client()


class FirestoreDocumentStore:
    def __init__(self, client: Optional[Any] = None):
        self._db = client if client is not None else create_firestore_client()

    def list_documents(self, collection: str) -> Iterator[Tuple[str, Dict[str, Any]]]:
        for doc in self._db.collection(collection).stream():
            yield str(doc.id), doc.to_dict() or {}

    def update_partial(self, collection: str, document_id: str, patch: Dict[str, Any]) -> None:
        if not patch:
            return
        # update() merges the listed fields and fails when the document is gone
        self._db.collection(collection).document(document_id).update(patch)
        logger.debug("Applied partial update", extra={"collection": collection, "doc_id": document_id})
