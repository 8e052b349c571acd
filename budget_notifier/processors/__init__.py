"""Alert processors."""

from .dedup import DedupProcessor, fingerprint

__all__ = ["DedupProcessor", "fingerprint"]
