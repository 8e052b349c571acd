"""Core data models."""

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

class BudgetAlert(BaseModel):
    """Billing budget alert decoded from a Pub/Sub message.

    Carries the JSON payload published by Cloud Billing together with the
    routing attributes of the message that delivered it.
    """
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    budget_display_name: str = Field(..., alias="budgetDisplayName")
    alert_threshold_exceeded: float = Field(..., alias="alertThresholdExceeded", ge=0, strict=True)
    cost_amount: float = Field(..., alias="costAmount", strict=True)
    cost_interval_start: datetime = Field(..., alias="costIntervalStart")
    budget_amount: float = Field(..., alias="budgetAmount", strict=True)
    budget_amount_type: str = Field("SPECIFIED_AMOUNT", alias="budgetAmountType")
    currency_code: str = Field("JPY", alias="currencyCode")

    # Message attributes
    billing_account_id: str = Field("", alias="billingAccountId")
    budget_id: str = Field(..., alias="budgetId", min_length=1)
    schema_version: str = Field("1.0", alias="schemaVersion")

    @field_validator("cost_interval_start")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

class PubSubMessage(BaseModel):
    """A Pub/Sub message as delivered to push endpoints and background functions."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    data: str = ""  # base64
    attributes: Dict[str, str] = Field(default_factory=dict)
    message_id: Optional[str] = Field(None, alias="messageId")
    publish_time: Optional[str] = Field(None, alias="publishTime")

    @field_validator("attributes", mode="before")
    @classmethod
    def _no_attributes(cls, value):
        return value or {}

class PushEnvelope(BaseModel):
    """Request body of a Pub/Sub push subscription."""
    message: PubSubMessage
    subscription: Optional[str] = None

class ClaimRecord(BaseModel):
    """Counter document stored per fingerprint."""
    key: str
    used: int
    updated_at: int

class ClaimResult(str, Enum):
    FIRST_CLAIM = "first_claim"
    ALREADY_CLAIMED = "already_claimed"

class Outcome(str, Enum):
    """Terminal result of handling one event."""
    NOTIFIED = "notified"
    DUPLICATE = "duplicate"
