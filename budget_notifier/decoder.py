"""Decoding of Cloud Billing budget notifications."""

import base64
import binascii
import json
from typing import Mapping

from pydantic import ValidationError

from budget_notifier.errors import DecodeError
from budget_notifier.schemas import BudgetAlert, PubSubMessage

# Message attributes copied onto the alert; anything else is ignored.
ROUTING_ATTRIBUTES = ("billingAccountId", "budgetId", "schemaVersion")


def decode(payload: bytes, attributes: Mapping[str, str]) -> BudgetAlert:
    """Parse a budget notification payload into a BudgetAlert.

    Unknown payload fields are ignored. Missing or mistyped required fields
    raise DecodeError.
    """
    try:
        data = json.loads(payload)
    except ValueError as e:
        raise DecodeError(f"Payload is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise DecodeError(f"Payload must be a JSON object, got {type(data).__name__}")

    routing = {k: attributes[k] for k in ROUTING_ATTRIBUTES if k in attributes}
    try:
        return BudgetAlert.model_validate({**data, **routing})
    except ValidationError as e:
        raise DecodeError(f"Invalid budget alert: {e}") from e


def decode_message(message: PubSubMessage) -> BudgetAlert:
    """Decode the base64 data of a Pub/Sub message."""
    try:
        payload = base64.b64decode(message.data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Message data is not valid base64: {e}") from e
    return decode(payload, message.attributes)
