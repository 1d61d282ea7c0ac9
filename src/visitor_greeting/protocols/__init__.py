"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Adding, removing or reordering provider tiers as a data change
- Unit testing with fake implementations
- Clear separation of concerns
"""

from .cache_store import CacheStore
from .language_model import LanguageModel
from .location_provider import LocationProvider
from .weather_provider import WeatherProvider

__all__ = [
    "CacheStore",
    "LanguageModel",
    "LocationProvider",
    "WeatherProvider",
]
