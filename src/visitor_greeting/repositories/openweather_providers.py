"""OpenWeather implementations of WeatherProvider.

Two tiers share one API key:
- One Call 3.0 (requires a "One Call by Call" subscription, 401 otherwise)
- Current Weather 2.5 (free tier)

Both request ``units=imperial`` so temperatures arrive in °F.
"""

import time
from typing import Any

import httpx

from visitor_greeting.entities import WeatherEntity
from visitor_greeting.errors import ProviderError

from .http_provider import HttpJsonProvider


class _OpenWeatherProvider(HttpJsonProvider):
    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openweathermap.org/data",
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        super().__init__(base_url=base_url, timeout=timeout, client=client)
        self._api_key = api_key

    def _params(self, lat: float, long: float) -> dict[str, Any]:
        return {"lat": lat, "lon": long, "appid": self._api_key, "units": "imperial"}

    def _build(
        self,
        temp: Any,
        feels_like: Any,
        humidity: Any,
        wind_speed: Any,
        conditions: Any,
    ) -> WeatherEntity:
        if not isinstance(conditions, list) or not conditions or not isinstance(conditions[0], dict):
            raise ProviderError(self.name, "missing 'weather' conditions")
        try:
            return WeatherEntity(
                temperature=round(float(temp)),
                condition=str(conditions[0]["description"]),
                condition_code=int(conditions[0]["id"]),
                humidity=float(humidity),
                wind_speed=float(wind_speed or 0),
                feels_like=round(float(feels_like)),
                timestamp=time.time(),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ProviderError(self.name, f"malformed payload: {e}") from e


class OneCallWeatherProvider(_OpenWeatherProvider):
    """One Call API 3.0, current conditions only."""

    name = "openweather-onecall-3.0"

    async def fetch(self, lat: float, long: float) -> WeatherEntity:
        params = self._params(lat, long)
        params["exclude"] = "minutely,hourly,daily,alerts"
        data = await self._get_json("/3.0/onecall", params=params)

        current = data.get("current")
        if not isinstance(current, dict):
            raise ProviderError(self.name, "missing 'current' block")

        return self._build(
            temp=current.get("temp"),
            feels_like=current.get("feels_like"),
            humidity=current.get("humidity"),
            wind_speed=current.get("wind_speed"),
            conditions=current.get("weather"),
        )


class CurrentWeatherProvider(_OpenWeatherProvider):
    """Current Weather API 2.5."""

    name = "openweather-current-2.5"

    async def fetch(self, lat: float, long: float) -> WeatherEntity:
        data = await self._get_json("/2.5/weather", params=self._params(lat, long))

        main = data.get("main")
        if not isinstance(main, dict):
            raise ProviderError(self.name, "missing 'main' block")
        wind = data.get("wind") if isinstance(data.get("wind"), dict) else {}

        return self._build(
            temp=main.get("temp"),
            feels_like=main.get("feels_like"),
            humidity=main.get("humidity"),
            wind_speed=wind.get("speed"),
            conditions=data.get("weather"),
        )


def default_weather_providers(
    api_key: str,
    base_url: str = "https://api.openweathermap.org/data",
    timeout: float = 10.0,
    client: httpx.AsyncClient | None = None,
) -> list[_OpenWeatherProvider]:
    """Build the weather tiers in priority order."""
    return [
        OneCallWeatherProvider(api_key=api_key, base_url=base_url, timeout=timeout, client=client),
        CurrentWeatherProvider(api_key=api_key, base_url=base_url, timeout=timeout, client=client),
    ]
