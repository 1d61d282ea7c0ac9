"""Repository layer for data access.

This layer wraps external dependencies (the in-process cache, IP
geolocation APIs, OpenWeather, OpenAI) behind protocol-based interfaces.

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from visitor_greeting.protocols import CacheStore, LanguageModel, LocationProvider, WeatherProvider

from .geolocation_providers import (
    IpApiProvider,
    IpInfoProvider,
    IpWhoIsProvider,
    default_location_providers,
)
from .http_provider import HttpJsonProvider
from .memory_cache import CacheManager
from .openai_language_model import OpenAILanguageModel
from .openweather_providers import (
    CurrentWeatherProvider,
    OneCallWeatherProvider,
    default_weather_providers,
)

__all__ = [
    "CacheStore",
    "LanguageModel",
    "LocationProvider",
    "WeatherProvider",
    "CacheManager",
    "HttpJsonProvider",
    "IpWhoIsProvider",
    "IpApiProvider",
    "IpInfoProvider",
    "default_location_providers",
    "OneCallWeatherProvider",
    "CurrentWeatherProvider",
    "default_weather_providers",
    "OpenAILanguageModel",
]
