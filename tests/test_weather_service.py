"""
Tests for WeatherResolver tiers, validation and synthesized fallback.
"""

import asyncio
import logging
from datetime import datetime
from unittest.mock import AsyncMock

import pytest

from conftest import make_weather
from visitor_greeting.errors import EntitlementError, ProviderError
from visitor_greeting.services import WeatherResolver, valid_coordinates

RAINY = make_weather("light rain", 55)
CLEAR = make_weather("clear sky", 80)


def tier(name: str, result=None, error: Exception | None = None) -> AsyncMock:
    provider = AsyncMock()
    provider.name = name
    if error is not None:
        provider.fetch.side_effect = error
    else:
        provider.fetch.return_value = result
    return provider


def make_resolver(cache, log_once, providers, month: int = 4, **kwargs) -> WeatherResolver:
    kwargs.setdefault("api_key_configured", True)
    return WeatherResolver(
        cache=cache,
        providers=providers,
        log_once=log_once,
        now=lambda: datetime(2026, month, 15, 12, 0),
        randint=lambda low, high: 1,
        **kwargs,
    )


@pytest.mark.parametrize(
    "lat, long, expected",
    [
        (0, 0, True),
        (90, 180, True),
        (-90, -180, True),
        (91, 0, False),
        (0, 180.5, False),
        (float("nan"), 0, False),
        (0, float("inf"), False),
        (True, 0, False),
        ("10", 0, False),
    ],
)
def test_valid_coordinates(lat, long, expected):
    assert valid_coordinates(lat, long) is expected


# ---------------------------------------------------------------------------
# Tiers
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_premium_tier_used_first(cache, log_once):
    premium, standard = tier("premium", RAINY), tier("standard", CLEAR)
    resolver = make_resolver(cache, log_once, [premium, standard])

    assert await resolver.resolve(40.0, -74.0) == RAINY
    standard.fetch.assert_not_awaited()


@pytest.mark.asyncio
async def test_entitlement_error_falls_through_without_retry(cache, log_once):
    premium = tier("premium", error=EntitlementError("premium", "HTTP 401"))
    standard = tier("standard", CLEAR)
    resolver = make_resolver(cache, log_once, [premium, standard])

    assert await resolver.resolve(40.0, -74.0) == CLEAR
    assert premium.fetch.await_count == 1
    standard.fetch.assert_awaited_once_with(40.0, -74.0)


@pytest.mark.asyncio
async def test_transient_error_falls_through(cache, log_once):
    premium = tier("premium", error=ProviderError("premium", "HTTP 502"))
    standard = tier("standard", CLEAR)
    resolver = make_resolver(cache, log_once, [premium, standard])

    assert await resolver.resolve(40.0, -74.0) == CLEAR


@pytest.mark.asyncio
async def test_timeout_falls_through(cache, log_once):
    class Slow:
        name = "slow"

        async def fetch(self, lat, long):
            await asyncio.sleep(5)

    standard = tier("standard", CLEAR)
    resolver = make_resolver(cache, log_once, [Slow(), standard], provider_timeout=0.01)

    assert await resolver.resolve(40.0, -74.0) == CLEAR


@pytest.mark.asyncio
async def test_all_tiers_fail_synthesizes(cache, log_once):
    premium = tier("premium", error=ProviderError("premium", "down"))
    standard = tier("standard", error=RuntimeError("boom"))
    resolver = make_resolver(cache, log_once, [premium, standard])

    weather = await resolver.resolve(40.0, -74.0)

    assert weather.condition == "partly cloudy"
    assert weather.condition_code == 802


# ---------------------------------------------------------------------------
# Short-circuits
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_out_of_range_latitude_never_calls_providers(cache, log_once):
    premium, standard = tier("premium", RAINY), tier("standard", CLEAR)
    resolver = make_resolver(cache, log_once, [premium, standard])

    weather = await resolver.resolve(91, 0)

    assert weather.humidity == 65
    premium.fetch.assert_not_awaited()
    standard.fetch.assert_not_awaited()


@pytest.mark.asyncio
async def test_missing_api_key_never_calls_providers(cache, log_once):
    premium = tier("premium", RAINY)
    resolver = make_resolver(cache, log_once, [premium], api_key_configured=False)

    weather = await resolver.resolve(40.0, -74.0)

    assert weather.condition == "partly cloudy"
    premium.fetch.assert_not_awaited()


# ---------------------------------------------------------------------------
# Caching
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_result_cached_by_coordinates(cache, clock, log_once):
    premium = tier("premium", RAINY)
    resolver = make_resolver(cache, log_once, [premium], ttl=3600)

    await resolver.resolve(40.0, -74.0)
    await resolver.resolve(40.0, -74.0)
    assert premium.fetch.await_count == 1
    assert cache.get("weather:40.0--74.0") == RAINY

    clock.advance(3601)
    await resolver.resolve(40.0, -74.0)
    assert premium.fetch.await_count == 2


@pytest.mark.asyncio
async def test_synthesized_weather_is_cached(cache, log_once):
    resolver = make_resolver(cache, log_once, [], api_key_configured=False)

    first = await resolver.resolve(10.0, 10.0)
    second = await resolver.resolve(10.0, 10.0)

    assert first is second


# ---------------------------------------------------------------------------
# Seasonal heuristic
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "month, lat, temperature, condition",
    [
        (1, 60.0, 41, "overcast"),
        (12, 30.0, 59, "overcast"),
        (3, 50.0, 41, "overcast"),
        (7, 50.0, 77, "clear sky"),
        (7, 20.0, 86, "clear sky"),
        (4, 50.0, 68, "partly cloudy"),
        (1, -33.9, 68, "partly cloudy"),
    ],
)
def test_fallback_seasonal_heuristic(cache, log_once, month, lat, temperature, condition):
    resolver = make_resolver(cache, log_once, [], month=month)

    weather = resolver.fallback(lat, 0.0)

    assert weather.temperature == temperature
    assert weather.condition == condition
    assert weather.feels_like == temperature + 1


def test_fallback_feels_like_jitter_range(cache, log_once):
    resolver = WeatherResolver(cache=cache, providers=[], api_key_configured=False, log_once=log_once)

    for _ in range(50):
        weather = resolver.fallback(40.0, -74.0)
        assert -2 <= weather.feels_like - weather.temperature <= 2


@pytest.mark.asyncio
async def test_distinct_invalid_coordinates_log_one_warning(cache, log_once, caplog):
    resolver = make_resolver(cache, log_once, [tier("premium", RAINY)])

    with caplog.at_level(logging.WARNING):
        for i in range(50):
            await resolver.resolve(91 + i, 0)

    warnings = [r for r in caplog.records if "Invalid coordinates" in r.getMessage()]
    assert len(warnings) == 1


@pytest.mark.asyncio
async def test_provider_error_text_does_not_defeat_dedup(cache, log_once, caplog):
    premium = tier("premium")
    premium.fetch.side_effect = [ProviderError("premium", f"HTTP 50{i}") for i in range(3)]
    resolver = make_resolver(cache, log_once, [premium, tier("standard", CLEAR)])

    with caplog.at_level(logging.WARNING):
        for i in range(3):
            await resolver.resolve(10.0 + i, 10.0)

    warnings = [r for r in caplog.records if "Weather provider premium failed" in r.getMessage()]
    assert len(warnings) == 1
