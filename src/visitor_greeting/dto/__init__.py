"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import ProjectDescriptionRequest
from .responses import (
    CacheStatsResponse,
    GreetingResponse,
    HealthCheckResponse,
    LocationResponse,
    LocationSummary,
    ProjectDescriptionResponse,
    WeatherSummary,
)

__all__ = [
    "ProjectDescriptionRequest",
    "CacheStatsResponse",
    "GreetingResponse",
    "HealthCheckResponse",
    "LocationResponse",
    "LocationSummary",
    "ProjectDescriptionResponse",
    "WeatherSummary",
]
