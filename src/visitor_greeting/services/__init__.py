"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from visitor_greeting.repositories import CacheManager, default_location_providers
    from visitor_greeting.services import LocationResolver

    resolver = LocationResolver(cache=CacheManager(), providers=default_location_providers())
    location = await resolver.resolve("8.8.8.8")
    ```
"""

from .description_service import FALLBACK_DESCRIPTION, ProjectDescriptionService
from .greeting_service import GreetingGenerator
from .location_service import LocationResolver
from .pipeline_service import GreetingPipeline, time_of_day_for_hour, zone_from_longitude
from .weather_service import WeatherResolver, valid_coordinates

__all__ = [
    "FALLBACK_DESCRIPTION",
    "GreetingGenerator",
    "GreetingPipeline",
    "LocationResolver",
    "ProjectDescriptionService",
    "WeatherResolver",
    "time_of_day_for_hour",
    "valid_coordinates",
    "zone_from_longitude",
]
