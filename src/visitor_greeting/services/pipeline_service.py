"""Location -> weather -> greeting pipeline."""

import logging
from collections.abc import Callable
from datetime import datetime, timezone as dt_timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from visitor_greeting.entities import LocationEntity, PersonalizedGreetingEntity, TimeOfDay

from .greeting_service import GreetingGenerator
from .location_service import LocationResolver
from .weather_service import WeatherResolver, valid_coordinates

logger = logging.getLogger(__name__)


def time_of_day_for_hour(hour: int) -> TimeOfDay:
    if hour < 6:
        return "night"
    if hour < 12:
        return "morning"
    if hour < 18:
        return "afternoon"
    if hour < 22:
        return "evening"
    return "night"


def _zone(name: str | None) -> dt_timezone | ZoneInfo:
    if not name:
        return dt_timezone.utc
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.debug("Unknown timezone %r, using UTC", name)
        return dt_timezone.utc


def zone_from_longitude(long: float) -> str:
    """Estimate a fixed-offset IANA zone from longitude (15° per hour).

    ``Etc/GMT`` names use inverted signs: UTC+9 is ``Etc/GMT-9``.
    """
    offset = round(long / 15)
    if offset == 0:
        return "Etc/GMT"
    return f"Etc/GMT{-offset:+d}"


def _known_zone(name: str | None) -> bool:
    if not name:
        return False
    try:
        ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        return False
    return True


class GreetingPipeline:
    """Run the three stages in strict order for one visitor.

    Each stage needs the previous stage's output, so there is no fan-out.
    A valid GPS pair skips the location stage.

    Example:
        ```python
        pipeline = GreetingPipeline(location_resolver, weather_resolver, greeting_generator)
        result = await pipeline.run(ip="8.8.8.8")
        print(result.greeting.greeting)
        ```
    """

    def __init__(
        self,
        location_resolver: LocationResolver,
        weather_resolver: WeatherResolver,
        greeting_generator: GreetingGenerator,
        now: Callable[[dt_timezone | ZoneInfo], datetime] = datetime.now,
    ) -> None:
        self._locations = location_resolver
        self._weather = weather_resolver
        self._greetings = greeting_generator
        self._now = now

    def time_of_day(self, timezone: str | None) -> TimeOfDay:
        """Classify the current hour in ``timezone`` (UTC if unknown)."""
        return time_of_day_for_hour(self._now(_zone(timezone)).hour)

    async def locate(
        self,
        ip: str | None,
        lat: float | None = None,
        long: float | None = None,
        timezone: str | None = None,
    ) -> LocationEntity:
        """Stage one: GPS coordinates if valid, IP geolocation otherwise.

        A GPS visitor without a usable timezone gets one estimated from
        the longitude.
        """
        if lat is not None and long is not None:
            if valid_coordinates(lat, long):
                return LocationEntity(
                    city="Unknown",
                    region="Unknown",
                    country="Unknown",
                    country_code="XX",
                    lat=lat,
                    long=long,
                    timezone=timezone if _known_zone(timezone) else zone_from_longitude(long),
                )
            logger.debug("Ignoring invalid GPS coordinates (%s, %s)", lat, long)

        return await self._locations.resolve(ip)

    async def run(
        self,
        ip: str | None,
        lat: float | None = None,
        long: float | None = None,
        timezone: str | None = None,
    ) -> PersonalizedGreetingEntity:
        """Produce a personalized greeting.

        Args:
            ip: Client IP (used unless a valid GPS pair is given)
            lat: Browser GPS latitude
            long: Browser GPS longitude
            timezone: Browser IANA timezone, used with GPS coordinates

        Returns:
            The greeting together with the location and weather it used
        """
        location = await self.locate(ip, lat, long, timezone)
        weather = await self._weather.resolve(location.lat, location.long)
        time_of_day = self.time_of_day(location.timezone)
        greeting = await self._greetings.generate(location.city, weather, time_of_day)

        return PersonalizedGreetingEntity(
            greeting=greeting,
            location=location,
            weather=weather,
            time_of_day=time_of_day,
        )
