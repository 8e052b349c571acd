"""Firestore-backed claim store."""

import time
from typing import Optional

from google.api_core import exceptions as gcp_exceptions
from google.cloud import firestore
from loguru import logger

from budget_notifier.errors import ClaimError
from budget_notifier.schemas import ClaimRecord
from .base import ClaimStore, coerce_counter


class FirestoreClaimStore(ClaimStore):
    """
    Claim counters stored as Firestore documents.

    Each fingerprint is a document in the namespace collection:

        {collection}/{fingerprint} = {"used": 3, "updated_at": 1567576776}

    Increments run in a Firestore transaction, so concurrent claims on the
    same document are serialized and only one of them commits ``used == 1``.
    Conflicting transactions are retried by the client library; if retries
    are exhausted the claim fails with ClaimError.
    """

    def __init__(
        self,
        project: Optional[str] = None,
        client: Optional[firestore.AsyncClient] = None,
    ):
        """
        Args:
            project: GCP project ID, defaults to the environment's project
            client: Existing async client, mainly for emulator tests
        """
        self.db = client or firestore.AsyncClient(project=project)

    async def increment(self, namespace: str, key: str) -> ClaimRecord:
        doc_ref = self.db.collection(namespace).document(key)

        @firestore.async_transactional
        async def increment_in_transaction(transaction) -> ClaimRecord:
            """Read, bump and merge the counter in one transaction."""
            snapshot = await doc_ref.get(transaction=transaction)

            used = 0
            if snapshot.exists:
                used = coerce_counter((snapshot.to_dict() or {}).get("used"))

            fields = {"used": used + 1, "updated_at": int(time.time())}
            transaction.set(doc_ref, fields, merge=True)
            return ClaimRecord(key=key, **fields)

        transaction = self.db.transaction()
        try:
            record = await increment_in_transaction(transaction)
        except gcp_exceptions.GoogleAPIError as e:
            logger.error(f"Firestore error claiming {namespace}/{key}: {e}")
            raise ClaimError(f"Claim transaction failed: {e}") from e
        except ValueError as e:
            # Raised by the transaction helper once commit retries run out
            logger.error(f"Firestore transaction for {namespace}/{key} gave up: {e}")
            raise ClaimError(f"Claim transaction failed: {e}") from e

        logger.debug(f"Claimed {namespace}/{key}: used={record.used}")
        return record

    async def get(self, namespace: str, key: str) -> Optional[ClaimRecord]:
        try:
            snapshot = await self.db.collection(namespace).document(key).get()
        except gcp_exceptions.GoogleAPIError as e:
            raise ClaimError(f"Failed to read claim {namespace}/{key}: {e}") from e

        if not snapshot.exists:
            return None
        data = snapshot.to_dict() or {}
        return ClaimRecord(
            key=key,
            used=coerce_counter(data.get("used")),
            updated_at=data.get("updated_at", 0),
        )
