"""Shared fixtures."""

import base64
import json
from datetime import datetime, timezone

import pytest

from budget_notifier.errors import DeliveryError
from budget_notifier.notifiers.base import BaseNotifier
from budget_notifier.schemas import BudgetAlert
from budget_notifier.stores.memory import InMemoryClaimStore


class RecordingNotifier(BaseNotifier):
    """Keeps sent messages instead of posting them."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent = []
        self.closed = False

    async def send(self, text: str) -> None:
        if self.fail:
            raise DeliveryError("webhook unavailable")
        self.sent.append(text)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def payload():
    return {
        "budgetDisplayName": "example",
        "alertThresholdExceeded": 0.2,
        "costAmount": 100.15,
        "costIntervalStart": "2019-09-01T07:00:00Z",
        "budgetAmount": 1000.0,
        "budgetAmountType": "SPECIFIED_AMOUNT",
        "currencyCode": "JPY",
    }

@pytest.fixture
def attributes():
    return {"billingAccountId": "account_id", "budgetId": "budget_id", "schemaVersion": "1.0"}

@pytest.fixture
def raw_payload(payload):
    return json.dumps(payload).encode()

@pytest.fixture
def pubsub_event(raw_payload, attributes):
    return {"data": base64.b64encode(raw_payload).decode(), "attributes": attributes}

@pytest.fixture
def sample_alert():
    return BudgetAlert(
        budget_display_name="Hogehoge",
        alert_threshold_exceeded=0.1,
        cost_amount=100.23,
        cost_interval_start=datetime.fromtimestamp(1567576776, tz=timezone.utc),
        budget_amount=1000,
        budget_amount_type="SPECIFIED_AMOUNT",
        currency_code="JPY",
        billing_account_id="billing_id",
        budget_id="budget_id",
        schema_version="1.0",
    )

@pytest.fixture
def store():
    return InMemoryClaimStore(clock=lambda: 1567576776)

@pytest.fixture
def notifier():
    return RecordingNotifier()
