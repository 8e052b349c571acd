"""Test the decode, claim and notify pipeline."""

import json

import pytest

from budget_notifier.engine import BudgetNotifierEngine
from budget_notifier.errors import ClaimError, DecodeError, DeliveryError
from budget_notifier.schemas import Outcome, PubSubMessage
from budget_notifier.stores.memory import InMemoryClaimStore
from conftest import RecordingNotifier

EXPECTED_TEXT = "[example] 2019年09月 予算(1000円)の20%に達しました。現在の利用額: 100円"


class SpyStore(InMemoryClaimStore):
    def __init__(self):
        super().__init__()
        self.calls = 0

    async def increment(self, namespace, key):
        self.calls += 1
        return await super().increment(namespace, key)


@pytest.mark.asyncio
async def test_first_delivery_notifies(store, notifier, raw_payload, attributes):
    engine = BudgetNotifierEngine(store, notifier, "billing_notifier")

    assert await engine.handle(raw_payload, attributes) is Outcome.NOTIFIED
    assert notifier.sent == [EXPECTED_TEXT]
    assert (await store.get("billing_notifier", "budget_id:1567321200:0.200000")).used == 1

@pytest.mark.asyncio
async def test_redelivery_is_silent(store, notifier, raw_payload, attributes):
    engine = BudgetNotifierEngine(store, notifier, "billing_notifier")

    assert await engine.handle(raw_payload, attributes) is Outcome.NOTIFIED
    assert await engine.handle(raw_payload, attributes) is Outcome.DUPLICATE
    assert await engine.handle(raw_payload, attributes) is Outcome.DUPLICATE
    assert notifier.sent == [EXPECTED_TEXT]
    assert (await store.get("billing_notifier", "budget_id:1567321200:0.200000")).used == 3

@pytest.mark.asyncio
async def test_next_threshold_notifies_again(store, notifier, payload, attributes):
    engine = BudgetNotifierEngine(store, notifier, "billing_notifier")

    await engine.handle(json.dumps(payload).encode(), attributes)
    payload["alertThresholdExceeded"] = 0.5
    assert await engine.handle(json.dumps(payload).encode(), attributes) is Outcome.NOTIFIED
    assert len(notifier.sent) == 2

@pytest.mark.asyncio
async def test_handle_message(store, notifier, pubsub_event):
    engine = BudgetNotifierEngine(store, notifier, "billing_notifier")
    message = PubSubMessage.model_validate(pubsub_event)

    assert await engine.handle_message(message) is Outcome.NOTIFIED
    assert await engine.handle_message(message) is Outcome.DUPLICATE
    assert notifier.sent == [EXPECTED_TEXT]

@pytest.mark.asyncio
async def test_decode_error_skips_store(notifier, payload, attributes):
    store = SpyStore()
    engine = BudgetNotifierEngine(store, notifier, "billing_notifier")
    del payload["costIntervalStart"]

    with pytest.raises(DecodeError):
        await engine.handle(json.dumps(payload).encode(), attributes)
    assert store.calls == 0
    assert notifier.sent == []

@pytest.mark.asyncio
async def test_claim_error_skips_delivery(store, notifier, raw_payload, attributes):
    store.seed("billing_notifier", "budget_id:1567321200:0.200000", {"used": "corrupt"})
    engine = BudgetNotifierEngine(store, notifier, "billing_notifier")

    with pytest.raises(ClaimError):
        await engine.handle(raw_payload, attributes)
    assert notifier.sent == []

@pytest.mark.asyncio
async def test_delivery_failure_loses_notification(store, raw_payload, attributes):
    failing = RecordingNotifier(fail=True)
    engine = BudgetNotifierEngine(store, failing, "billing_notifier")

    with pytest.raises(DeliveryError):
        await engine.handle(raw_payload, attributes)

    # The claim was committed before delivery, so the redelivered event is
    # treated as a duplicate even though nothing reached the webhook.
    working = RecordingNotifier()
    engine = BudgetNotifierEngine(store, working, "billing_notifier")
    assert await engine.handle(raw_payload, attributes) is Outcome.DUPLICATE
    assert working.sent == []

@pytest.mark.asyncio
async def test_close_closes_notifier(store, notifier):
    engine = BudgetNotifierEngine(store, notifier, "billing_notifier")
    await engine.close()
    assert notifier.closed
