"""Configuration settings for Budget Notifier."""

from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_COLLECTION = "billing_notifier"

class ServerSettings(BaseSettings):
    host: str = Field("0.0.0.0", validation_alias="BUDGET_NOTIFIER_HOST")
    port: int = Field(8080, validation_alias="PORT")

class FirestoreSettings(BaseSettings):
    project: Optional[str] = Field(None, validation_alias="GCP_PROJECT")
    collection: str = Field(DEFAULT_COLLECTION, validation_alias="FIRESTORE_COLLECTION")

    @field_validator("collection", mode="before")
    @classmethod
    def _default_when_empty(cls, value):
        return value or DEFAULT_COLLECTION

class SlackSettings(BaseSettings):
    webhook_url: Optional[str] = Field(None, validation_alias="SLACK_WEBHOOK_URL")
    timeout: float = Field(10.0, validation_alias="SLACK_WEBHOOK_TIMEOUT")

class Settings(BaseSettings):
    """Global Application Settings."""
    server: ServerSettings = Field(default_factory=ServerSettings)
    firestore: FirestoreSettings = Field(default_factory=FirestoreSettings)

    # Notifiers
    slack: SlackSettings = Field(default_factory=SlackSettings)

    # Global
    log_level: str = Field("INFO", validation_alias="BUDGET_NOTIFIER_LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore"
    )

settings = Settings()
