"""
Tests for the OpenWeather tiers against canned HTTP responses.
"""

import httpx
import pytest

from visitor_greeting.errors import EntitlementError, ProviderError
from visitor_greeting.repositories import CurrentWeatherProvider, OneCallWeatherProvider

ONECALL_OK = {
    "lat": 51.5,
    "lon": -0.13,
    "current": {
        "temp": 58.6,
        "feels_like": 57.2,
        "humidity": 82,
        "wind_speed": 9.2,
        "weather": [{"id": 500, "main": "Rain", "description": "light rain"}],
    },
}

CURRENT_OK = {
    "name": "London",
    "weather": [{"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"}],
    "main": {"temp": 59.4, "feels_like": 58.5, "humidity": 60},
    "wind": {"speed": 7.8},
}


def client_returning(status: int, payload=None, requests: list | None = None) -> httpx.AsyncClient:
    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        return httpx.Response(status, json=payload)

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_onecall_parses_and_rounds():
    requests: list[httpx.Request] = []
    provider = OneCallWeatherProvider(api_key="k", client=client_returning(200, ONECALL_OK, requests))

    weather = await provider.fetch(51.5, -0.13)

    assert weather.temperature == 59
    assert weather.feels_like == 57
    assert weather.condition == "light rain"
    assert weather.condition_code == 500
    assert weather.wind_speed == 9.2

    params = requests[0].url.params
    assert requests[0].url.path == "/data/3.0/onecall"
    assert params["units"] == "imperial"
    assert params["exclude"] == "minutely,hourly,daily,alerts"
    assert params["appid"] == "k"


@pytest.mark.asyncio
async def test_onecall_401_raises_entitlement_error():
    provider = OneCallWeatherProvider(api_key="k", client=client_returning(401, {"cod": 401}))

    with pytest.raises(EntitlementError):
        await provider.fetch(51.5, -0.13)


@pytest.mark.asyncio
async def test_onecall_missing_current_block():
    provider = OneCallWeatherProvider(api_key="k", client=client_returning(200, {"lat": 1}))

    with pytest.raises(ProviderError, match="current"):
        await provider.fetch(51.5, -0.13)


@pytest.mark.asyncio
async def test_current_weather_parses():
    requests: list[httpx.Request] = []
    provider = CurrentWeatherProvider(api_key="k", client=client_returning(200, CURRENT_OK, requests))

    weather = await provider.fetch(51.5, -0.13)

    assert requests[0].url.path == "/data/2.5/weather"
    assert weather.temperature == 59
    assert weather.feels_like == 58
    assert weather.condition == "clear sky"
    assert weather.humidity == 60


@pytest.mark.asyncio
async def test_current_weather_wind_defaults_to_zero():
    payload = {k: v for k, v in CURRENT_OK.items() if k != "wind"}
    provider = CurrentWeatherProvider(api_key="k", client=client_returning(200, payload))

    weather = await provider.fetch(51.5, -0.13)

    assert weather.wind_speed == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"main": {"temp": 50}},
        {"main": {"temp": 50, "feels_like": 49, "humidity": 1}, "weather": []},
        {"weather": [{"id": 800, "description": "clear"}]},
        {"main": {"temp": "hot", "feels_like": 49, "humidity": 1}, "weather": [{"id": 800, "description": "x"}]},
    ],
)
async def test_current_weather_malformed_payloads(payload):
    provider = CurrentWeatherProvider(api_key="k", client=client_returning(200, payload))

    with pytest.raises(ProviderError):
        await provider.fetch(51.5, -0.13)


@pytest.mark.asyncio
async def test_current_weather_server_error():
    provider = CurrentWeatherProvider(api_key="k", client=client_returning(500, {"message": "oops"}))

    with pytest.raises(ProviderError, match="HTTP 500"):
        await provider.fetch(51.5, -0.13)
