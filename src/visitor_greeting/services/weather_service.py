"""Weather resolution with tiered providers and a synthesized fallback."""

import asyncio
import logging
import math
import random
import time
from collections.abc import Callable, Sequence
from datetime import datetime

from visitor_greeting.config import settings
from visitor_greeting.entities import WeatherEntity
from visitor_greeting.errors import EntitlementError
from visitor_greeting.protocols import CacheStore, WeatherProvider
from visitor_greeting.utils import LogOnce

logger = logging.getLogger(__name__)


def valid_coordinates(lat: object, long: object) -> bool:
    """Check that both values are finite numbers within geographic range."""
    if isinstance(lat, bool) or isinstance(long, bool):
        return False
    if not isinstance(lat, (int, float)) or not isinstance(long, (int, float)):
        return False
    return (
        math.isfinite(lat)
        and math.isfinite(long)
        and -90 <= lat <= 90
        and -180 <= long <= 180
    )


class WeatherResolver:
    """Resolve coordinates to current weather.

    Tiers are tried in order. A tier that answers 401 is skipped for the
    rest of the call. When no tier yields data, or no API key is set, or
    the coordinates are invalid, a plausible seasonal estimate is
    synthesized instead.
    """

    def __init__(
        self,
        cache: CacheStore,
        providers: Sequence[WeatherProvider],
        api_key_configured: bool | None = None,
        log_once: LogOnce | None = None,
        ttl: float | None = None,
        provider_timeout: float | None = None,
        now: Callable[[], datetime] = datetime.now,
        randint: Callable[[int, int], int] = random.randint,
    ) -> None:
        """Initialize the resolver.

        Args:
            cache: Shared cache store.
            providers: Weather tiers in priority order.
            api_key_configured: Whether a provider key exists. Defaults to settings.
            log_once: Deduplicating logger. Defaults to a private instance.
            ttl: Cache TTL in seconds. Defaults to settings.
            provider_timeout: Per-tier timeout in seconds. Defaults to settings.
            now: Current local time, used for the season heuristic.
            randint: Inclusive random integer source for feels-like jitter.
        """
        self._cache = cache
        self._providers = list(providers)
        self._configured = settings.has_weather_key if api_key_configured is None else api_key_configured
        self._log_once = log_once or LogOnce(logger)
        self._ttl = ttl or settings.weather_cache_ttl
        self._timeout = provider_timeout or settings.weather_provider_timeout
        self._now = now
        self._randint = randint

    async def resolve(self, lat: float, long: float) -> WeatherEntity:
        """Return current weather for a coordinate pair.

        Args:
            lat: Latitude in degrees
            long: Longitude in degrees

        Returns:
            Provider weather, or a synthesized estimate
        """
        cache_key = f"weather:{lat}-{long}"
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached

        weather: WeatherEntity | None = None
        if not self._configured:
            self._log_once.warning(
                "OpenWeather API key is not configured, using fallback weather", key="weather-no-key"
            )
        elif not valid_coordinates(lat, long):
            self._log_once.warning(
                f"Invalid coordinates ({lat}, {long}), using fallback weather", key="invalid-coordinates"
            )
        else:
            weather = await self._fetch(lat, long)
            if weather is None:
                self._log_once.warning(
                    "All weather providers failed, using fallback weather", key="weather-all-failed"
                )

        if weather is None:
            weather = self.fallback(lat, long)

        self._cache.set(cache_key, weather, self._ttl)
        return weather

    async def _fetch(self, lat: float, long: float) -> WeatherEntity | None:
        for provider in self._providers:
            try:
                return await asyncio.wait_for(provider.fetch(lat, long), timeout=self._timeout)
            except EntitlementError:
                self._log_once.warning(
                    f"Weather provider {provider.name} requires a subscription, skipping tier",
                    key=f"weather-entitlement:{provider.name}",
                )
            except asyncio.TimeoutError:
                self._log_once.warning(
                    f"Weather provider {provider.name} timed out after {self._timeout}s",
                    key=f"weather-timeout:{provider.name}",
                )
            except Exception as e:
                self._log_once.warning(
                    f"Weather provider {provider.name} failed: {e}",
                    key=f"weather-error:{provider.name}",
                )
        return None

    def fallback(self, lat: float, long: float) -> WeatherEntity:
        """Synthesize weather from the month and latitude.

        Northern hemisphere bias: winter is colder and overcast, more so
        above 45°N; summer is warm and clear. Everything else is a mild,
        partly cloudy day.
        """
        month = self._now().month
        temperature = 68
        condition = "partly cloudy"
        condition_code = 802

        northern = isinstance(lat, (int, float)) and math.isfinite(lat) and lat > 0
        high_latitude = northern and lat > 45
        if northern and month in (12, 1, 2, 3):
            temperature = 41 if high_latitude else 59
            condition = "overcast"
            condition_code = 804
        elif northern and month in (6, 7, 8, 9):
            temperature = 77 if high_latitude else 86
            condition = "clear sky"
            condition_code = 800

        return WeatherEntity(
            temperature=temperature,
            condition=condition,
            condition_code=condition_code,
            humidity=65,
            wind_speed=3.5,
            feels_like=temperature + self._randint(-2, 2),
            timestamp=time.time(),
        )
