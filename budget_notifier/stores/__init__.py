"""Counter stores backing the deduplicator."""

from .base import ClaimStore, coerce_counter
from .memory import InMemoryClaimStore

__all__ = ["ClaimStore", "InMemoryClaimStore", "coerce_counter"]
