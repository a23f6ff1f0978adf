"""
One-time backfill of default fields in Firestore.

Patches documents in users, queries, chats and messages with their missing
defaults (role/isOnline, status plus assignment fields, participants, status).
Safe to re-run: documents that already have their defaults are not written.

Usage:
  python scripts/firestore_migrate.py
"""

from __future__ import annotations

import os
import sys

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from config import settings  # noqa: E402
from infrastructure.firestore_store import FirestoreDocumentStore  # noqa: E402
from services.backfill_service import BackfillRunner  # noqa: E402
from utils.logger import get_logger  # noqa: E402

logger = get_logger("firestore_migrate")


def main() -> int:
    if not bool(getattr(settings, "FIREBASE_READY", False)):
        print("[ERROR] FIREBASE_READY is false. Configure Firebase Admin credentials first.")
        return 2

    try:
        report = BackfillRunner(FirestoreDocumentStore()).run()
    except Exception as e:
        logger.exception("Migration failed")
        print(f"[ERROR] Migration failed: {e}")
        return 1

    # A re-run over migrated data stays silent apart from the banners
    if report.total_updated:
        logger.info("Migration summary", extra={"summary": report.as_dict(), "updated": report.total_updated})
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
