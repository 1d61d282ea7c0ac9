"""Weather provider protocol."""

from typing import Protocol, runtime_checkable

from visitor_greeting.entities import WeatherEntity


@runtime_checkable
class WeatherProvider(Protocol):
    """Protocol for one tier of the weather lookup.

    Tiers are tried in order by WeatherResolver.
    """

    @property
    def name(self) -> str:
        """Return a short identifier used in log messages."""
        ...

    async def fetch(self, lat: float, long: float) -> WeatherEntity:
        """Fetch current conditions for a coordinate pair.

        Args:
            lat: Latitude in degrees
            long: Longitude in degrees

        Returns:
            Current weather, temperatures in °F

        Raises:
            EntitlementError: If the key is not subscribed to this tier
            ProviderError: If the provider returned no usable data
            httpx.HTTPError: On transport failures
        """
        ...
