"""Greeting generation via a language model with a deterministic fallback."""

import json
import logging
import time
from collections.abc import Callable
from typing import Any

from visitor_greeting.config import settings
from visitor_greeting.entities import TONES, GreetingEntity, TimeOfDay, WeatherEntity
from visitor_greeting.protocols import CacheStore, LanguageModel
from visitor_greeting.utils import LogOnce, normalize_emoji

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You write one short greeting line for a visitor of a personal portfolio site.

RULES:
- Comment on the current weather or the time of day
- Do not mention the visitor's location and do not say "welcome"
- Keep the greeting under 120 characters
- Use at most one emoji, preferably none
- Vary the wording, avoid generic phrasing

Respond with a JSON object with exactly these fields:
{"greeting": string, "emoji": string, "tone": "friendly" | "professional" | "casual"}"""

_DECODER = json.JSONDecoder()


def _first_json_object(text: str) -> Any:
    """Decode the first top-level ``{...}`` value embedded in ``text``."""
    start = text.find("{")
    while start != -1:
        try:
            data, _ = _DECODER.raw_decode(text, start)
        except ValueError:
            start = text.find("{", start + 1)
            continue
        return data
    return None


def parse_greeting_json(text: str) -> dict[str, Any] | None:
    """Parse a model response into a greeting object.

    Tries the whole text first, then the first ``{...}`` object embedded
    in it (models sometimes wrap JSON in prose or code fences).

    Returns:
        The parsed object if it has a non-blank string ``greeting``, else None
    """
    try:
        data = json.loads(text)
    except ValueError:
        data = _first_json_object(text)

    if not isinstance(data, dict):
        return None
    greeting = data.get("greeting")
    if isinstance(greeting, str) and greeting.strip():
        return data
    return None


class GreetingGenerator:
    """Produce a greeting for a weather/time context.

    Model output is cached per (city, condition, time of day, half-hour
    bucket), so identical contexts within the same bucket reuse one model
    call. Any failure returns a template greeting instead.
    """

    def __init__(
        self,
        cache: CacheStore,
        language_model: LanguageModel,
        log_once: LogOnce | None = None,
        ttl: float | None = None,
        bucket_seconds: int | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the generator.

        Args:
            cache: Shared cache store.
            language_model: Chat model used to write greetings.
            log_once: Deduplicating logger. Defaults to a private instance.
            ttl: Cache TTL for generated greetings in seconds. Defaults to settings.
            bucket_seconds: Width of the cache time bucket. Defaults to settings.
            clock: Wall clock in Unix seconds.
        """
        self._cache = cache
        self._model = language_model
        self._log_once = log_once or LogOnce(logger)
        self._ttl = ttl or settings.greeting_cache_ttl
        self._bucket_seconds = bucket_seconds or settings.greeting_bucket_seconds
        self._clock = clock

    def cache_key(self, city: str, condition: str, time_of_day: TimeOfDay) -> str:
        bucket = int(self._clock() // self._bucket_seconds)
        return f"greeting:{city}:{condition}:{time_of_day}:{bucket}"

    async def generate(
        self,
        city: str,
        weather: WeatherEntity,
        time_of_day: TimeOfDay,
    ) -> GreetingEntity:
        """Return a greeting for the given context.

        Args:
            city: Visitor city, used only to scope the cache
            weather: Current weather at the visitor's location
            time_of_day: morning, afternoon, evening or night

        Returns:
            A model-written greeting, or a template greeting on any failure
        """
        cache_key = self.cache_key(city, weather.condition, time_of_day)
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached

        if not self._model.is_configured():
            self._log_once.warning(
                "Language model is not configured, using fallback greeting", key="model-not-configured"
            )
            return self.fallback(weather, time_of_day)

        try:
            content = await self._model.complete(
                SYSTEM_PROMPT,
                self._user_prompt(weather, time_of_day),
                json_output=True,
            )
        except Exception as e:
            self._log_once.warning(f"Greeting generation failed: {e}", key="greeting-error")
            return self.fallback(weather, time_of_day)

        data = parse_greeting_json(content)
        if data is None:
            logger.warning("Unparsable greeting from %s: %.200r", self._model.model_name, content)
            return self.fallback(weather, time_of_day)

        tone = data.get("tone")
        greeting = GreetingEntity(
            greeting=data["greeting"].strip(),
            emoji=normalize_emoji(data.get("emoji")),
            tone=tone if tone in TONES else "friendly",
            timestamp=self._clock(),
        )
        self._cache.set(cache_key, greeting, self._ttl)
        return greeting

    @staticmethod
    def _user_prompt(weather: WeatherEntity, time_of_day: TimeOfDay) -> str:
        return (
            f"Weather: {weather.condition}, {weather.temperature}°F "
            f"(feels like {weather.feels_like}°F), humidity {weather.humidity:.0f}%\n"
            f"Time of day: {time_of_day}\n"
            "Write the greeting for these exact conditions."
        )

    def fallback(self, weather: WeatherEntity, time_of_day: TimeOfDay) -> GreetingEntity:
        """Pick a template greeting from the weather and time of day."""
        condition = weather.condition.lower()
        if "rain" in condition:
            greeting = f"Rainy {time_of_day}! Perfect weather for cozy coding"
            emoji = "☔"
        elif "sun" in condition or weather.temperature > 75:
            greeting = f"Sunny {time_of_day}! {weather.temperature}°F of perfect weather"
            emoji = "☀️"
        elif weather.temperature < 50:
            greeting = f"Chilly {time_of_day}! {weather.temperature}°F calls for hot coffee"
            emoji = "🧥"
        else:
            greeting = f"Lovely {time_of_day}! {weather.temperature}°F and {weather.condition}"
            emoji = "👋"

        return GreetingEntity(
            greeting=greeting,
            emoji=emoji,
            tone="friendly",
            timestamp=self._clock(),
        )
