#!/usr/bin/env python3
"""
Demo script for visitor greetings.

This script runs the location -> weather -> greeting pipeline against the
real providers for a handful of sample visitors. Without API keys it
still works and shows the synthesized weather and template greetings.
"""

import asyncio
import time

import httpx

from visitor_greeting import settings
from visitor_greeting.api.dependencies import build_handler
from visitor_greeting.repositories import CacheManager, OpenAILanguageModel
from visitor_greeting.utils import setup_logging


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


async def demo_greetings(handler) -> None:
    """Greet visitors from a few public and local addresses."""
    print_section("Greetings by IP")

    visitors = [
        "8.8.8.8",  # Google DNS, US
        "1.1.1.1",  # Cloudflare, anycast
        "2001:4860:4860::8888",  # IPv6
        "127.0.0.1",  # local, default location
        "not-an-ip",  # malformed, default location
    ]

    for ip in visitors:
        start = time.time()
        response = await handler.get_greeting(ip=ip)
        duration = (time.time() - start) * 1000
        print(f"\n  Visitor: {ip}")
        if response.location is not None:
            print(f"  Location: {response.location.city}, {response.location.country}")
        if response.weather is not None:
            print(f"  Weather: {response.weather.temperature}°F, {response.weather.condition}")
        print(f"  Greeting: {response.emoji} {response.greeting} ({response.tone}, {response.time_of_day})")
        print(f"  Time: {duration:.0f}ms")


async def demo_gps(handler) -> None:
    """Greet a visitor who shared browser coordinates."""
    print_section("Greeting by GPS coordinates")

    response = await handler.get_greeting(ip=None, lat=35.6762, lon=139.6503, timezone="Asia/Tokyo")
    print(f"\n  Tokyo ({response.time_of_day}): {response.emoji} {response.greeting}")


async def demo_cache(handler) -> None:
    """Show that repeat visitors are served from cache."""
    print_section("Cache")

    start = time.time()
    await handler.get_greeting(ip="8.8.8.8")
    duration = (time.time() - start) * 1000
    print(f"\n  Repeat visitor 8.8.8.8 served in {duration:.1f}ms")
    print(f"  Entries cached: {handler.get_stats().total_entries}")

    result = handler.clear_cache()
    print(f"  Cleared {result['deleted_count']} entries")


async def main() -> None:
    """Run all demos."""
    setup_logging(settings.log_level)

    print("\n👋 Visitor Greeting Demo")
    print("=" * 70)
    print(f"OpenWeather key: {'set' if settings.has_weather_key else 'missing (synthesized weather)'}")
    print(f"OpenAI key: {'set' if settings.has_openai_key else 'missing (template greetings)'}")

    async with httpx.AsyncClient(timeout=10.0) as http_client:
        language_model = OpenAILanguageModel.create()
        handler = build_handler(http_client, language_model, cache=CacheManager())
        try:
            await demo_greetings(handler)
            await demo_gps(handler)
            await demo_cache(handler)

            print("\n" + "=" * 70)
            print("✅ Demo completed successfully!")
            print("=" * 70)

        except Exception as e:
            print(f"\n❌ Error: {e}")
        finally:
            await language_model.close()


if __name__ == "__main__":
    asyncio.run(main())
