"""Notification delivery for budget alerts."""

from .base import BaseNotifier
from .slack import SlackNotifier
from .template import BudgetAlertTemplate

__all__ = ["BaseNotifier", "SlackNotifier", "BudgetAlertTemplate"]
