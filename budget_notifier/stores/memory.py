"""In-memory claim store."""

import asyncio
import time
from typing import Any, Callable, Dict, Optional

from budget_notifier.schemas import ClaimRecord
from .base import ClaimStore, coerce_counter


class InMemoryClaimStore(ClaimStore):
    """Process-local store with the same transactional contract as Firestore.

    Increments are serialized with a lock, which stands in for the store's
    per-document transaction.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._lock = asyncio.Lock()
        self._documents: Dict[str, Dict[str, Dict[str, Any]]] = {}

    def seed(self, namespace: str, key: str, document: Dict[str, Any]) -> None:
        """Store a raw document, bypassing validation."""
        self._documents.setdefault(namespace, {})[key] = dict(document)

    def document(self, namespace: str, key: str) -> Optional[Dict[str, Any]]:
        doc = self._documents.get(namespace, {}).get(key)
        return dict(doc) if doc is not None else None

    async def increment(self, namespace: str, key: str) -> ClaimRecord:
        async with self._lock:
            doc = self._documents.get(namespace, {}).get(key)
            used = 0 if doc is None else coerce_counter(doc.get("used"))

            # Yield between read and write so concurrent callers interleave here
            await asyncio.sleep(0)

            fields = {"used": used + 1, "updated_at": int(self._clock())}
            merged = {**(doc or {}), **fields}
            self._documents.setdefault(namespace, {})[key] = merged
            return ClaimRecord(key=key, **fields)

    async def get(self, namespace: str, key: str) -> Optional[ClaimRecord]:
        doc = self._documents.get(namespace, {}).get(key)
        if doc is None:
            return None
        return ClaimRecord(
            key=key,
            used=coerce_counter(doc.get("used")),
            updated_at=doc.get("updated_at", 0),
        )
