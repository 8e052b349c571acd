"""Base notifier interface."""

from abc import ABC, abstractmethod
from budget_notifier.schemas import BudgetAlert
from .template import BudgetAlertTemplate

class BaseNotifier(ABC):
    """Interface for sending notifications."""

    @abstractmethod
    async def send(self, text: str) -> None:
        """Send a rendered message. Raises DeliveryError on failure."""
        pass

    def create_message(self, alert: BudgetAlert) -> str:
        """Convert BudgetAlert to message text."""
        return BudgetAlertTemplate.format_text(alert)

    async def close(self) -> None:
        """Release any open connections."""
        pass
