"""IP geolocation providers.

Each class satisfies the LocationProvider protocol. They are listed here
in the order LocationResolver tries them by default:

- ipwho.is: richest payload, explicit ``success`` flag
- ip-api.com: ``status == "success"`` envelope, free tier is HTTP only
- ipinfo.io: minimal payload, coordinates as a ``"lat,long"`` string
"""

from typing import Any

import httpx

from visitor_greeting.entities import LocationEntity
from visitor_greeting.errors import ProviderError

from .http_provider import HttpJsonProvider


def _text(data: dict[str, Any], key: str, default: str) -> str:
    value = data.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def _coordinate(provider: str, value: Any) -> float:
    if value is None or isinstance(value, bool):
        raise ProviderError(provider, "missing coordinates")
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ProviderError(provider, f"invalid coordinate {value!r}") from e


class IpWhoIsProvider(HttpJsonProvider):
    """ipwho.is lookups (no key required)."""

    name = "ipwho.is"

    def __init__(
        self,
        base_url: str = "https://ipwho.is",
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(base_url=base_url, timeout=timeout, client=client)

    async def lookup(self, ip: str) -> LocationEntity:
        data = await self._get_json(f"/{ip}")

        if data.get("success") is not True:
            raise ProviderError(self.name, data.get("message") or "success flag not set")

        timezone = data.get("timezone")
        if isinstance(timezone, dict):
            timezone = timezone.get("id")

        return LocationEntity(
            city=_text(data, "city", "Unknown City"),
            region=_text(data, "region", "Unknown Region"),
            country=_text(data, "country", "Unknown Country"),
            country_code=_text(data, "country_code", "XX"),
            lat=_coordinate(self.name, data.get("latitude")),
            long=_coordinate(self.name, data.get("longitude")),
            timezone=timezone if isinstance(timezone, str) and timezone else "UTC",
        )


class IpApiProvider(HttpJsonProvider):
    """ip-api.com lookups (no key required)."""

    name = "ip-api.com"

    def __init__(
        self,
        base_url: str = "http://ip-api.com",
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(base_url=base_url, timeout=timeout, client=client)

    async def lookup(self, ip: str) -> LocationEntity:
        data = await self._get_json(f"/json/{ip}")

        if data.get("status") != "success":
            raise ProviderError(self.name, data.get("message") or "status is not success")

        return LocationEntity(
            city=_text(data, "city", "Unknown City"),
            region=_text(data, "regionName", "Unknown Region"),
            country=_text(data, "country", "Unknown Country"),
            country_code=_text(data, "countryCode", "XX"),
            lat=_coordinate(self.name, data.get("lat")),
            long=_coordinate(self.name, data.get("lon")),
            timezone=_text(data, "timezone", "UTC"),
        )


class IpInfoProvider(HttpJsonProvider):
    """ipinfo.io lookups.

    The free payload reports only the country code, which is reused as the
    country name.
    """

    name = "ipinfo.io"

    def __init__(
        self,
        base_url: str = "https://ipinfo.io",
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(base_url=base_url, timeout=timeout, client=client)

    async def lookup(self, ip: str) -> LocationEntity:
        data = await self._get_json(f"/{ip}/json")

        loc = data.get("loc")
        if not isinstance(loc, str) or loc.count(",") != 1:
            raise ProviderError(self.name, "missing 'loc' coordinates")
        lat, long = loc.split(",")
        country_code = _text(data, "country", "XX")

        return LocationEntity(
            city=_text(data, "city", "Unknown City"),
            region=_text(data, "region", "Unknown Region"),
            country=country_code if country_code != "XX" else "Unknown Country",
            country_code=country_code,
            lat=_coordinate(self.name, lat.strip()),
            long=_coordinate(self.name, long.strip()),
            timezone=_text(data, "timezone", "UTC"),
        )


def default_location_providers(
    timeout: float = 10.0,
    client: httpx.AsyncClient | None = None,
) -> list[HttpJsonProvider]:
    """Build the provider chain in priority order."""
    return [
        IpWhoIsProvider(timeout=timeout, client=client),
        IpApiProvider(timeout=timeout, client=client),
        IpInfoProvider(timeout=timeout, client=client),
    ]
