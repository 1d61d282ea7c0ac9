"""Response DTOs for API endpoints."""

from typing import Literal

from pydantic import BaseModel, Field


class LocationResponse(BaseModel):
    """Full location as returned by /api/get-location."""

    city: str
    region: str
    country: str
    country_code: str
    lat: float
    long: float
    timezone: str


class LocationSummary(BaseModel):
    """Location fields shown next to a greeting."""

    city: str
    region: str
    country: str


class WeatherSummary(BaseModel):
    """Weather fields shown next to a greeting."""

    temperature: int = Field(..., description="Temperature in °F")
    condition: str
    feels_like: int = Field(..., description="Apparent temperature in °F")


class GreetingResponse(BaseModel):
    """Response DTO for /api/greeting.

    ``weather`` and ``location`` are null only for the static fallback
    returned when the pipeline itself fails.
    """

    greeting: str = Field(..., description="Greeting text")
    emoji: str = Field("", description="Zero or one emoji")
    tone: Literal["friendly", "professional", "casual"] = "friendly"
    timestamp: float = Field(..., description="When the greeting was produced (Unix timestamp)")
    time_of_day: Literal["morning", "afternoon", "evening", "night"] | None = None
    weather: WeatherSummary | None = None
    location: LocationSummary | None = None


class ProjectDescriptionResponse(BaseModel):
    """Response DTO for /api/project-description."""

    title: str
    description: str


class CacheStatsResponse(BaseModel):
    """Response DTO for cache statistics."""

    total_entries: int = Field(..., description="Entries held, including expired ones not yet evicted", ge=0)


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status")
    weather_api_configured: bool = Field(..., description="Whether an OpenWeather key is set")
    language_model_configured: bool = Field(..., description="Whether an OpenAI key is set")
