"""HTTP handlers for greeting operations.

Handlers convert between DTOs (API contracts) and service calls.
The greeting route never fails: if the pipeline raises despite its own
fallbacks, a static time-of-day greeting is returned.
"""

import logging
import time
from dataclasses import asdict

from fastapi import HTTPException

from visitor_greeting.dto import (
    CacheStatsResponse,
    GreetingResponse,
    LocationResponse,
    LocationSummary,
    ProjectDescriptionRequest,
    ProjectDescriptionResponse,
    WeatherSummary,
)
from visitor_greeting.protocols import CacheStore
from visitor_greeting.services import (
    GreetingPipeline,
    ProjectDescriptionService,
    WeatherResolver,
    valid_coordinates,
)

logger = logging.getLogger(__name__)

_STATIC_GREETINGS = {
    "morning": "Good morning",
    "afternoon": "Good afternoon",
    "evening": "Good evening",
    "night": "Good evening",
}


class GreetingHandler:
    """HTTP handlers for greeting operations.

    This handler delegates business logic to the services and handles
    HTTP-specific concerns like:
    - Converting entities to DTOs
    - The last-resort static greeting
    - Error responses for the admin endpoints

    Example:
        ```python
        handler = GreetingHandler(pipeline=pipeline, weather_resolver=weather, ...)

        @app.get("/api/greeting", response_model=GreetingResponse)
        async def greeting(request: Request):
            return await handler.get_greeting(ip=request.client.host)
        ```
    """

    def __init__(
        self,
        pipeline: GreetingPipeline,
        weather_resolver: WeatherResolver,
        description_service: ProjectDescriptionService,
        cache: CacheStore,
    ) -> None:
        """Initialize the greeting handler.

        Args:
            pipeline: Location -> weather -> greeting pipeline (required).
            weather_resolver: Used for weather context in project descriptions.
            description_service: Project description writer.
            cache: The shared cache, for stats and administrative reset.
        """
        self._pipeline = pipeline
        self._weather = weather_resolver
        self._descriptions = description_service
        self._cache = cache

    async def get_greeting(
        self,
        ip: str | None,
        lat: float | None = None,
        lon: float | None = None,
        timezone: str | None = None,
    ) -> GreetingResponse:
        """Handle GET /api/greeting requests.

        Args:
            ip: Client IP extracted from proxy headers
            lat: Optional browser GPS latitude
            lon: Optional browser GPS longitude
            timezone: Optional browser IANA timezone

        Returns:
            GreetingResponse, the static fallback if the pipeline raised
        """
        try:
            result = await self._pipeline.run(ip=ip, lat=lat, long=lon, timezone=timezone)
        except Exception:
            logger.exception("Greeting pipeline failed, returning static greeting")
            return self.static_greeting(timezone)

        return GreetingResponse(
            greeting=result.greeting.greeting,
            emoji=result.greeting.emoji,
            tone=result.greeting.tone,
            timestamp=result.greeting.timestamp,
            time_of_day=result.time_of_day,
            weather=WeatherSummary(
                temperature=result.weather.temperature,
                condition=result.weather.condition,
                feels_like=result.weather.feels_like,
            ),
            location=LocationSummary(
                city=result.location.city,
                region=result.location.region,
                country=result.location.country,
            ),
        )

    def static_greeting(self, timezone: str | None = None) -> GreetingResponse:
        """Build the greeting used when nothing else worked."""
        time_of_day = self._pipeline.time_of_day(timezone)
        return GreetingResponse(
            greeting=_STATIC_GREETINGS[time_of_day],
            emoji="",
            tone="friendly",
            timestamp=time.time(),
            time_of_day=time_of_day,
        )

    async def get_location(self, ip: str | None) -> LocationResponse:
        """Handle GET /api/get-location requests."""
        location = await self._pipeline.locate(ip)
        return LocationResponse(**asdict(location))

    async def describe_project(self, request: ProjectDescriptionRequest) -> ProjectDescriptionResponse:
        """Handle POST /api/project-description requests."""
        weather = None
        if request.lat is not None and request.lon is not None:
            if not valid_coordinates(request.lat, request.lon):
                raise HTTPException(
                    status_code=422,
                    detail="lat must be within [-90, 90] and lon within [-180, 180]",
                )
            weather = await self._weather.resolve(request.lat, request.lon)

        description = await self._descriptions.describe(
            title=request.title,
            technologies=request.technologies,
            weather=weather,
        )
        return ProjectDescriptionResponse(title=request.title, description=description)

    def get_stats(self) -> CacheStatsResponse:
        """Handle GET /stats requests."""
        return CacheStatsResponse(total_entries=self._cache.count())

    def clear_cache(self) -> dict:
        """Handle DELETE /cache requests.

        Returns:
            Dict with clear operation result
        """
        count = self._cache.clear()
        logger.info("Cache cleared, %d entries removed", count)
        return {
            "success": True,
            "deleted_count": count,
            "message": "Cache cleared successfully",
        }
