"""
Shared fixtures and fakes.

External dependencies (geolocation APIs, OpenWeather, OpenAI) are replaced
with protocol-compatible fakes or httpx.MockTransport, so no network
access is needed.
"""

import os

# Minimal env so settings never pick up real credentials
os.environ["APP_ENV"] = "test"
os.environ.pop("OPENAI_API_KEY", None)
os.environ.pop("OPENWEATHER_API_KEY", None)
os.environ.pop("ADMIN_TOKEN", None)

import logging  # noqa: E402

import pytest  # noqa: E402

from visitor_greeting.entities import LocationEntity, WeatherEntity  # noqa: E402
from visitor_greeting.errors import LanguageModelError  # noqa: E402
from visitor_greeting.repositories import CacheManager  # noqa: E402
from visitor_greeting.utils import LogOnce  # noqa: E402


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeLanguageModel:
    """LanguageModel that replays canned responses and records calls."""

    model_name = "fake-model"

    def __init__(self, responses=None, configured: bool = True, error: Exception | None = None):
        self.responses = list(responses or [])
        self.configured = configured
        self.error = error
        self.calls: list[tuple[str, str]] = []

    def is_configured(self) -> bool:
        return self.configured

    async def complete(self, system_prompt, user_prompt, *, json_output=False, max_tokens=None, temperature=None):
        self.calls.append((system_prompt, user_prompt))
        if self.error is not None:
            raise self.error
        if not self.responses:
            raise LanguageModelError("no canned response left")
        return self.responses.pop(0)


class FakeLocationProvider:
    """LocationProvider returning a fixed location or raising."""

    def __init__(self, name: str, location: LocationEntity | None = None, error: Exception | None = None):
        self.name = name
        self.location = location
        self.error = error
        self.calls: list[str] = []

    async def lookup(self, ip: str) -> LocationEntity:
        self.calls.append(ip)
        if self.error is not None:
            raise self.error
        return self.location


SAN_FRANCISCO = LocationEntity(
    city="San Francisco",
    region="California",
    country="United States",
    country_code="US",
    lat=37.7749,
    long=-122.4194,
    timezone="America/Los_Angeles",
)


def make_weather(condition: str = "clear sky", temperature: int = 65, feels_like: int | None = None) -> WeatherEntity:
    return WeatherEntity(
        temperature=temperature,
        condition=condition,
        condition_code=800,
        humidity=50,
        wind_speed=4.0,
        feels_like=temperature if feels_like is None else feels_like,
        timestamp=1_700_000_000.0,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock) -> CacheManager:
    return CacheManager(clock=clock)


@pytest.fixture
def log_once() -> LogOnce:
    return LogOnce(logging.getLogger("tests.pipeline"))
