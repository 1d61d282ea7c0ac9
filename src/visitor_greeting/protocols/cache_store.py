"""Cache storage protocol.

Defines the interface for the process-wide key-value store shared by
the location, weather and greeting services.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for TTL key-value cache backends.

    Any type that implements these methods satisfies the protocol,
    no explicit inheritance needed.

    Example:
        ```python
        from visitor_greeting.protocols import CacheStore

        cache: CacheStore = CacheManager()
        ```
    """

    def set(self, key: str, value: Any, ttl: float) -> None:
        """Store a value, replacing any existing entry for the key.

        Args:
            key: Cache key
            value: Value to cache
            ttl: Time-to-live in seconds
        """
        ...

    def get(self, key: str) -> Any | None:
        """Return the value for a key if present and not expired.

        Args:
            key: Cache key

        Returns:
            The cached value, or None if missing or expired
        """
        ...

    def clear(self) -> int:
        """Remove every entry.

        Returns:
            Number of entries removed
        """
        ...

    def count(self) -> int:
        """Count stored entries.

        Returns:
            Number of entries currently held
        """
        ...
