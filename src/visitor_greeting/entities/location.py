"""Location domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LocationEntity:
    """Best-effort geographic location of a visitor.

    Attributes:
        city: City name
        region: Region, state or province
        country: Country name
        country_code: ISO 3166-1 alpha-2 code ("XX" when unknown)
        lat: Latitude in degrees
        long: Longitude in degrees
        timezone: IANA timezone name (e.g., "America/New_York")
    """

    city: str
    region: str
    country: str
    country_code: str
    lat: float
    long: float
    timezone: str


DEFAULT_LOCATION = LocationEntity(
    city="New York",
    region="New York",
    country="United States",
    country_code="US",
    lat=40.7128,
    long=-74.0060,
    timezone="America/New_York",
)
