"""Cache entry domain entity."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntryEntity:
    """A value held by the in-memory cache.

    Entries are never mutated; a later ``set`` for the same key replaces
    the whole entry.

    Attributes:
        value: The cached value
        expires_at: Clock reading after which the entry is stale
    """

    value: Any
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at
