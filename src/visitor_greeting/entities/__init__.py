"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .cache_entry import CacheEntryEntity
from .greeting import TONES, GreetingEntity, PersonalizedGreetingEntity, TimeOfDay, Tone
from .location import DEFAULT_LOCATION, LocationEntity
from .weather import WeatherEntity

__all__ = [
    "CacheEntryEntity",
    "DEFAULT_LOCATION",
    "GreetingEntity",
    "LocationEntity",
    "PersonalizedGreetingEntity",
    "TONES",
    "TimeOfDay",
    "Tone",
    "WeatherEntity",
]
