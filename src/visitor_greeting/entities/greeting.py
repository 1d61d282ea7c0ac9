"""Greeting domain entities."""

from dataclasses import dataclass
from typing import Literal

from .location import LocationEntity
from .weather import WeatherEntity

TimeOfDay = Literal["morning", "afternoon", "evening", "night"]
Tone = Literal["friendly", "professional", "casual"]

TONES: tuple[str, ...] = ("friendly", "professional", "casual")


@dataclass(frozen=True)
class GreetingEntity:
    """A short greeting line.

    Attributes:
        greeting: The greeting text (about 120 characters by prompt contract)
        emoji: Zero or one emoji grapheme
        tone: One of friendly, professional, casual
        timestamp: When the greeting was produced (Unix timestamp)
    """

    greeting: str
    emoji: str
    tone: Tone
    timestamp: float


@dataclass(frozen=True)
class PersonalizedGreetingEntity:
    """Output of the full location -> weather -> greeting pipeline."""

    greeting: GreetingEntity
    location: LocationEntity
    weather: WeatherEntity
    time_of_day: TimeOfDay
