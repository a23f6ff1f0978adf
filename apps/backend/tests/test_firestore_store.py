import unittest
from unittest.mock import MagicMock, patch

from infrastructure import firestore_store
from infrastructure.firestore_store import FirestoreDocumentStore


def _snapshot(doc_id, data):
    snap = MagicMock()
    snap.id = doc_id
    snap.to_dict.return_value = data
    return snap


class FirestoreDocumentStoreTests(unittest.TestCase):
    def test_list_documents_streams_collection(self):
        client = MagicMock()
        client.collection.return_value.stream.return_value = iter(
            [_snapshot("u1", {"role": "lead"}), _snapshot("u2", None)]
        )

        docs = list(FirestoreDocumentStore(client).list_documents("users"))

        client.collection.assert_called_once_with("users")
        self.assertEqual(docs, [("u1", {"role": "lead"}), ("u2", {})])

    def test_update_partial_uses_document_update(self):
        client = MagicMock()

        FirestoreDocumentStore(client).update_partial("messages", "m1", {"status": "sent"})

        client.collection.assert_called_once_with("messages")
        client.collection.return_value.document.assert_called_once_with("m1")
        client.collection.return_value.document.return_value.update.assert_called_once_with({"status": "sent"})

    def test_empty_patch_is_not_sent(self):
        client = MagicMock()

        FirestoreDocumentStore(client).update_partial("chats", "c1", {})

        client.collection.assert_not_called()

    def test_update_errors_propagate(self):
        client = MagicMock()
        client.collection.return_value.document.return_value.update.side_effect = RuntimeError("not found")

        with self.assertRaises(RuntimeError):
            FirestoreDocumentStore(client).update_partial("users", "missing", {"role": "agent"})

    def test_client_requires_firebase_ready(self):
        with patch.object(firestore_store.settings, "FIREBASE_READY", False):
            with self.assertRaises(RuntimeError):
                FirestoreDocumentStore()

    def test_client_created_from_firebase_admin(self):
        with patch.object(firestore_store.settings, "FIREBASE_READY", True), patch(
            "firebase_admin.firestore.client"
        ) as client_factory:
            store = FirestoreDocumentStore()

        client_factory.assert_called_once_with()
        self.assertIs(store._db, client_factory.return_value)


if __name__ == "__main__":
    unittest.main()
