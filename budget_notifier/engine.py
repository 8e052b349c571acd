"""Main Orchestration Engine."""

from typing import Mapping
from loguru import logger

from budget_notifier.config import Settings
from budget_notifier.decoder import decode, decode_message
from budget_notifier.errors import DeliveryError
from budget_notifier.schemas import BudgetAlert, ClaimResult, Outcome, PubSubMessage
from budget_notifier.processors.dedup import DedupProcessor, fingerprint
from budget_notifier.stores.base import ClaimStore
from budget_notifier.notifiers.base import BaseNotifier

class BudgetNotifierEngine:
    """Decode, deduplicate and notify, once per inbound event.

    The claim is committed before the message is sent. A delivery failure
    therefore loses that notification: the redelivered event finds the
    claim taken and is dropped as a duplicate. Sending twice is considered
    worse than not sending.
    """

    def __init__(self, store: ClaimStore, notifier: BaseNotifier, namespace: str):
        self.dedup = DedupProcessor(store, namespace)
        self.notifier = notifier

    @classmethod
    def from_settings(cls, settings: Settings) -> "BudgetNotifierEngine":
        # Firestore client library is only loaded when an engine is built from settings
        from budget_notifier.stores.firestore import FirestoreClaimStore
        from budget_notifier.notifiers.slack import SlackNotifier

        return cls(
            store=FirestoreClaimStore(project=settings.firestore.project),
            notifier=SlackNotifier(settings.slack.webhook_url, timeout=settings.slack.timeout),
            namespace=settings.firestore.collection,
        )

    async def handle(self, payload: bytes, attributes: Mapping[str, str]) -> Outcome:
        return await self._process_and_notify(decode(payload, attributes))

    async def handle_message(self, message: PubSubMessage) -> Outcome:
        logger.info(f"Received message {message.message_id}: {message.attributes}")
        return await self._process_and_notify(decode_message(message))

    async def close(self):
        await self.notifier.close()

    async def _process_and_notify(self, alert: BudgetAlert) -> Outcome:
        key = fingerprint(alert)

        # 1. Claim
        if await self.dedup.claim_once(key) is ClaimResult.ALREADY_CLAIMED:
            logger.info(f"Alert {key} already notified, skipping")
            return Outcome.DUPLICATE

        # 2. Notify
        text = self.notifier.create_message(alert)
        try:
            await self.notifier.send(text)
        except DeliveryError as e:
            logger.error(f"Delivery failed for claimed alert {key}, it will not be resent: {e}")
            raise

        logger.info(f"Sent budget alert {key}")
        return Outcome.NOTIFIED
