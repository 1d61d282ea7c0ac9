"""Weather domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class WeatherEntity:
    """Current conditions at a coordinate pair.

    Attributes:
        temperature: Air temperature in °F, rounded to an integer
        condition: Provider description (e.g., "light rain")
        condition_code: Provider condition id (OpenWeather codes)
        humidity: Relative humidity in percent
        wind_speed: Wind speed in mph
        feels_like: Apparent temperature in °F, rounded to an integer
        timestamp: When this entity was created (Unix timestamp)
    """

    temperature: int
    condition: str
    condition_code: int
    humidity: float
    wind_speed: float
    feels_like: int
    timestamp: float
