from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Sequence

from infrastructure.firestore_store import DocumentStore
from models.backfill_models import BACKFILL_RULES, CollectionRule
from utils.logger import get_logger

logger = get_logger("backfill_service")


class BackfillError(Exception):
    """Raised when listing a collection or applying a patch fails. The run stops at the first one."""

    def __init__(self, message: str, collection: str, document_id: Optional[str] = None):
        super().__init__(message)
        self.collection = collection
        self.document_id = document_id


@dataclass
class CollectionStats:
    collection: str
    scanned: int = 0
    updated: int = 0


@dataclass
class BackfillReport:
    collections: Dict[str, CollectionStats] = field(default_factory=dict)

    @property
    def total_updated(self) -> int:
        return sum(s.updated for s in self.collections.values())

    def as_dict(self) -> Dict[str, Any]:
        return {
            name: {"scanned": s.scanned, "updated": s.updated}
            for name, s in self.collections.items()
        }


class BackfillRunner:
    """
    Sequential default-field backfill over a fixed list of collections.

    Each document gets a patch built from its own current fields; non-empty
    patches are merged back one document at a time. No retries, no rollback:
    the first store failure aborts the run as a BackfillError. Every rule is
    idempotent, so an aborted run is simply started again.
    """

    def __init__(
        self,
        store: DocumentStore,
        rules: Sequence[CollectionRule] = BACKFILL_RULES,
        echo: Callable[[str], None] = print,
    ):
        self.store = store
        self.rules = tuple(rules)
        self._echo = echo

    def run(self) -> BackfillReport:
        report = BackfillReport()
        for rule in self.rules:
            self._echo(f"Migrating {rule.collection}...")
            report.collections[rule.collection] = self._migrate_collection(rule)
        self._echo("All migrations complete!")
        return report

    def _migrate_collection(self, rule: CollectionRule) -> CollectionStats:
        stats = CollectionStats(collection=rule.collection)
        try:
            documents = self.store.list_documents(rule.collection)
            for doc_id, data in documents:
                stats.scanned += 1
                patch = rule.build_patch(data or {})
                if patch.is_empty():
                    continue

                updates = patch.to_partial_update()
                self._apply(rule, doc_id, updates)
                stats.updated += 1
                logger.info(
                    f"Updated {rule.label} {doc_id}: {rule.describe(updates)}",
                    extra={"collection": rule.collection, "doc_id": doc_id, "fields": sorted(updates)},
                )
        except BackfillError:
            raise
        except Exception as e:
            raise BackfillError(
                f"Backfill of '{rule.collection}' failed: {e}",
                collection=rule.collection,
            ) from e
        return stats

    def _apply(self, rule: CollectionRule, doc_id: str, updates: Dict[str, Any]) -> None:
        try:
            self.store.update_partial(rule.collection, doc_id, updates)
        except Exception as e:
            raise BackfillError(
                f"Failed to update {rule.label} {doc_id}: {e}",
                collection=rule.collection,
                document_id=doc_id,
            ) from e
