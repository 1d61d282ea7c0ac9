"""
Tests for ProjectDescriptionService.
"""

import pytest

from conftest import FakeLanguageModel, make_weather
from visitor_greeting.errors import LanguageModelError
from visitor_greeting.services import FALLBACK_DESCRIPTION, ProjectDescriptionService


@pytest.mark.asyncio
async def test_describes_with_technologies_and_weather():
    model = FakeLanguageModel(["  A weather-aware portfolio.  "])
    service = ProjectDescriptionService(model)

    description = await service.describe("Portfolio", ["FastAPI", "httpx"], weather=make_weather("light rain", 52))

    assert description == "A weather-aware portfolio."
    prompt = model.calls[0][1]
    assert '"Portfolio"' in prompt
    assert "FastAPI, httpx" in prompt
    assert "light rain, 52°F" in prompt


@pytest.mark.asyncio
async def test_weather_is_optional():
    model = FakeLanguageModel(["Short and sweet."])

    await ProjectDescriptionService(model).describe("Portfolio", [])

    assert "weather" not in model.calls[0][1]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "model",
    [
        FakeLanguageModel(configured=False),
        FakeLanguageModel(error=LanguageModelError("rate limited")),
        FakeLanguageModel(["   "]),
    ],
)
async def test_falls_back_to_generic_description(model):
    assert await ProjectDescriptionService(model).describe("Portfolio", ["Go"]) == FALLBACK_DESCRIPTION
