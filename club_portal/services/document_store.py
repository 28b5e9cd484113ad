"""TinyDB document store client"""

import logging
import threading
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from functools import reduce
from pathlib import Path
from typing import Callable, Iterator, List, Optional

from tinydb import Query, TinyDB
from tinydb.storages import MemoryStorage
from tinydb.table import Table

from club_portal.errors import StoreUnavailable

logger = logging.getLogger(__name__)

# Collections written by the portal
MEMBERSHIP_REQUESTS = "membership_requests"
MEMBERS = "members"
PROJECT_INTERESTS = "project_interests"
PROJECT_MEMBERSHIPS = "project_memberships"
EVENT_RSVPS = "event_rsvps"

# Collections owned elsewhere, read-only here
PROJECTS = "projects"
SESSIONS = "sessions"
EVENTS = "events"


class DocumentStore:
    """Collection-of-documents store backed by one TinyDB database.

    Every document carries a store-assigned string ``id``. All operations
    are serialised by a re-entrant lock, which also makes the
    read-check-write sequences inside ``transaction()`` atomic with respect
    to other requests. Writes made inside a transaction are recorded in an
    undo log and reverted if the block raises.

    Build one with ``open()`` at process start (or ``in_memory()`` in tests)
    and hand it to the application; nothing here is a module-level singleton.
    """

    def __init__(self, db: TinyDB):
        self.db = db
        self._lock = threading.RLock()
        self._undo_log: Optional[List[Callable[[], None]]] = None

    @classmethod
    def open(cls, path: str) -> "DocumentStore":
        """Open (or create) a file-backed store"""
        db_path = Path(path)
        try:
            db_path.parent.mkdir(parents=True, exist_ok=True)
            db = TinyDB(str(db_path))
        except (OSError, ValueError) as e:
            raise StoreUnavailable(f"Cannot open database at {db_path}") from e
        logger.info(f"Database connected: {db_path}")
        return cls(db)

    @classmethod
    def in_memory(cls) -> "DocumentStore":
        """Volatile store for tests and local experiments"""
        return cls(TinyDB(storage=MemoryStorage))

    def close(self):
        with self._lock:
            self.db.close()
        logger.info("Database closed")

    def table(self, collection: str) -> Table:
        return self.db.table(collection)

    @contextmanager
    def _guard(self, action: str) -> Iterator[None]:
        """Translate storage faults into StoreUnavailable"""
        try:
            yield
        except (OSError, ValueError) as e:
            logger.error(f"Document store failure during {action}: {e}")
            raise StoreUnavailable() from e

    def _record_undo(self, action: Callable[[], None]):
        if self._undo_log is not None:
            self._undo_log.append(action)

    # =========================================================================
    # Transactions
    # =========================================================================

    @contextmanager
    def transaction(self) -> Iterator["DocumentStore"]:
        """All-or-nothing block of store operations.

        Nested calls join the outermost transaction.
        """
        with self._lock:
            if self._undo_log is not None:
                yield self
                return

            self._undo_log = []
            try:
                yield self
            except BaseException:
                undo_log, self._undo_log = self._undo_log, None
                for undo in reversed(undo_log):
                    try:
                        undo()
                    except Exception:
                        logger.error("Rollback step failed", exc_info=True)
                logger.warning(f"Transaction rolled back ({len(undo_log)} writes reverted)")
                raise
            else:
                self._undo_log = None

    # =========================================================================
    # Reads
    # =========================================================================

    def get(self, collection: str, doc_id: str) -> Optional[dict]:
        """Get document by ID"""
        Doc = Query()
        with self._lock, self._guard(f"get {collection}"):
            result = self.table(collection).search(Doc.id == doc_id)
        return dict(result[0]) if result else None

    def find(self, collection: str, order_by: Optional[str] = None, **equals) -> List[dict]:
        """Get all documents whose fields equal the given values"""
        Doc = Query()
        with self._lock, self._guard(f"find {collection}"):
            table = self.table(collection)
            if equals:
                cond = reduce(
                    lambda acc, item: acc & item,
                    (Doc[field] == value for field, value in equals.items())
                )
                docs = table.search(cond)
            else:
                docs = table.all()

        results = [dict(doc) for doc in docs]
        if order_by:
            results.sort(key=lambda d: str(d.get(order_by) or ""))
        return results

    def find_range(
        self,
        collection: str,
        field: str,
        gte: str,
        order_by: Optional[str] = None,
        limit: Optional[int] = None
    ) -> List[dict]:
        """Get documents with ``field >= gte``, optionally ordered ascending and limited.

        Documents whose ``field`` is missing or not a string are skipped.
        """
        Doc = Query()
        with self._lock, self._guard(f"range query on {collection}"):
            docs = self.table(collection).search(Doc[field].test(_string_at_least, gte))

        results = [dict(doc) for doc in docs]
        if order_by:
            results.sort(key=lambda d: str(d.get(order_by) or ""))
        if limit is not None:
            results = results[:limit]
        return results

    def count_range(self, collection: str, field: str, gte: str) -> int:
        """Count documents with ``field >= gte``"""
        Doc = Query()
        with self._lock, self._guard(f"count on {collection}"):
            return self.table(collection).count(Doc[field].test(_string_at_least, gte))

    # =========================================================================
    # Writes
    # =========================================================================

    def insert(self, collection: str, doc: dict) -> dict:
        """Insert a document, assigning an ``id`` when it has none"""
        doc = dict(doc)
        doc.setdefault("id", str(uuid.uuid4()))
        with self._lock, self._guard(f"insert into {collection}"):
            table = self.table(collection)
            internal_id = table.insert(doc)
            self._record_undo(lambda: table.remove(doc_ids=[internal_id]))
        return doc

    def update(self, collection: str, doc_id: str, changes: dict) -> Optional[dict]:
        """Patch fields on a document; returns the updated document or None"""
        return self.update_if(collection, doc_id, {}, changes)

    def update_if(
        self,
        collection: str,
        doc_id: str,
        expected: dict,
        changes: dict
    ) -> Optional[dict]:
        """Compare-and-swap patch.

        Applies ``changes`` only if the document exists and every field in
        ``expected`` currently has the expected value. Returns the updated
        document, or None when nothing was written.
        """
        Doc = Query()
        with self._lock:
            before = self.get(collection, doc_id)
            if before is None:
                return None
            if any(before.get(field) != value for field, value in expected.items()):
                return None

            with self._guard(f"update {collection}"):
                table = self.table(collection)
                table.update(changes, Doc.id == doc_id)

            def restore(doc):
                for key in changes:
                    if key in before:
                        doc[key] = before[key]
                    else:
                        doc.pop(key, None)

            self._record_undo(lambda: table.update(restore, Doc.id == doc_id))

        return {**before, **changes}

    def delete(self, collection: str, doc_id: str) -> bool:
        """Delete document by ID; returns False when it did not exist"""
        Doc = Query()
        with self._lock, self._guard(f"delete from {collection}"):
            table = self.table(collection)
            removed = table.search(Doc.id == doc_id)
            if not removed:
                return False
            table.remove(Doc.id == doc_id)
            docs = [dict(doc) for doc in removed]
            self._record_undo(lambda: table.insert_multiple(docs))
        return True


def now_iso() -> str:
    """UTC timestamp as stored on documents"""
    return datetime.now(timezone.utc).isoformat()


def _string_at_least(value, lower: str) -> bool:
    return isinstance(value, str) and value >= lower
