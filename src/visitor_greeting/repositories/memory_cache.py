"""In-memory implementation of CacheStore.

One instance is created per process by the API lifespan and injected into
every service, so all of them share one store.
"""

import time
from collections.abc import Callable
from typing import Any

from visitor_greeting.entities import CacheEntryEntity


class CacheManager:
    """Dictionary-backed TTL cache.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.

    Expiry is lazy: an expired entry is removed when a ``get`` finds it.
    There is no background sweep and no size bound.

    Example:
        ```python
        cache = CacheManager()
        cache.set("location:8.8.8.8", location, ttl=3600)
        cache.get("location:8.8.8.8")
        ```
    """

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        """Initialize the cache.

        Args:
            clock: Returns the current time in seconds. Defaults to time.monotonic.
        """
        self._clock = clock or time.monotonic
        self._entries: dict[str, CacheEntryEntity] = {}

    def set(self, key: str, value: Any, ttl: float) -> None:
        self._entries[key] = CacheEntryEntity(value=value, expires_at=self._clock() + ttl)

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None

        if entry.is_expired(self._clock()):
            del self._entries[key]
            return None

        return entry.value

    def clear(self) -> int:
        count = len(self._entries)
        self._entries.clear()
        return count

    def count(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries
