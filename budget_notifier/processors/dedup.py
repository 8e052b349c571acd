"""Deduplication processor."""

from typing import Optional

from loguru import logger

from budget_notifier.schemas import BudgetAlert, ClaimResult
from budget_notifier.stores.base import ClaimStore


def fingerprint(alert: BudgetAlert) -> str:
    """Stable key identifying one alert: budget, billing interval and threshold."""
    interval_start = int(alert.cost_interval_start.timestamp())
    return f"{alert.budget_id}:{interval_start}:{alert.alert_threshold_exceeded:.6f}"


class DedupProcessor:
    """Drops alerts that have already been claimed in the counter store.

    Every attempt increments the stored counter, so the store also records
    how many times an alert was redelivered. Only the attempt that commits
    the value 1 wins the claim.
    """

    def __init__(self, store: ClaimStore, namespace: str):
        self.store = store
        self.namespace = namespace

    async def claim_once(self, key: str, namespace: Optional[str] = None) -> ClaimResult:
        """
        Claim ``key`` in ``namespace`` (defaults to the processor's).
        Raises ClaimError when the store transaction fails; callers must not
        treat that as either outcome.
        """
        record = await self.store.increment(namespace or self.namespace, key)
        if record.used == 1:
            return ClaimResult.FIRST_CLAIM
        return ClaimResult.ALREADY_CLAIMED

    async def process(self, alert: BudgetAlert) -> BudgetAlert | None:
        key = fingerprint(alert)
        result = await self.claim_once(key)
        if result is ClaimResult.ALREADY_CLAIMED:
            logger.info(f"Dropping duplicate alert {key}")
            return None
        return alert
