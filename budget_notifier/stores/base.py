"""Base claim store interface."""

from abc import ABC, abstractmethod
from typing import Any, Optional

from budget_notifier.errors import ClaimError
from budget_notifier.schemas import ClaimRecord


def coerce_counter(value: Any) -> int:
    """Validate a stored ``used`` counter."""
    # bool is an int subclass but never a valid counter
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ClaimError("invalid field")
    return value


class ClaimStore(ABC):
    """Document store holding one usage counter per fingerprint.

    Documents live in a namespace (collection) and carry ``used`` and
    ``updated_at`` fields. Other fields on a document are left untouched.
    """

    @abstractmethod
    async def increment(self, namespace: str, key: str) -> ClaimRecord:
        """
        Atomically read the counter for ``key``, add one and write it back.
        A missing document counts as zero. Returns the committed record.
        Raises ClaimError if the transaction fails or the stored counter is
        not a non-negative integer.
        """
        pass

    @abstractmethod
    async def get(self, namespace: str, key: str) -> Optional[ClaimRecord]:
        """Point read of a claim record, None if it was never claimed."""
        pass
