"""IP geolocation provider protocol.

Implementations include:
- ipwho.is (primary)
- ip-api.com
- ipinfo.io
"""

from typing import Protocol, runtime_checkable

from visitor_greeting.entities import LocationEntity


@runtime_checkable
class LocationProvider(Protocol):
    """Protocol for a single IP geolocation backend.

    Providers are tried in order by LocationResolver; a provider signals
    failure by raising, never by returning a partial location.
    """

    @property
    def name(self) -> str:
        """Return a short identifier used in log messages."""
        ...

    async def lookup(self, ip: str) -> LocationEntity:
        """Resolve a public IP address.

        Args:
            ip: A normalized, public IPv4 or IPv6 address

        Returns:
            The location reported by the provider

        Raises:
            ProviderError: If the provider returned no usable data
            httpx.HTTPError: On transport failures
        """
        ...
