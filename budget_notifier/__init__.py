"""Budget Notifier - deduplicated billing budget alerts for chat webhooks."""

__version__ = "0.1.0"
