"""Visitor Greeting - location, weather and time aware greetings.

This package provides a layered architecture for the greeting pipeline:

Layers:
    - protocols: Interface contracts (CacheStore, LocationProvider, WeatherProvider, LanguageModel)
    - repositories: Data access implementations
    - services: Business logic
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from visitor_greeting.repositories import (
        CacheManager,
        OpenAILanguageModel,
        default_location_providers,
        default_weather_providers,
    )
    from visitor_greeting.services import (
        GreetingGenerator,
        GreetingPipeline,
        LocationResolver,
        WeatherResolver,
    )

    cache = CacheManager()
    pipeline = GreetingPipeline(
        LocationResolver(cache, default_location_providers()),
        WeatherResolver(cache, default_weather_providers(api_key="...")),
        GreetingGenerator(cache, OpenAILanguageModel.create()),
    )
    result = await pipeline.run(ip="8.8.8.8")
    ```

For HTTP API:
    ```python
    from visitor_greeting.api.app import app
    ```
"""

from visitor_greeting.config import get_settings, settings
from visitor_greeting.dto import GreetingResponse, LocationResponse
from visitor_greeting.entities import (
    DEFAULT_LOCATION,
    GreetingEntity,
    LocationEntity,
    PersonalizedGreetingEntity,
    WeatherEntity,
)
from visitor_greeting.errors import EntitlementError, LanguageModelError, ProviderError
from visitor_greeting.handlers import GreetingHandler
from visitor_greeting.protocols import CacheStore, LanguageModel, LocationProvider, WeatherProvider
from visitor_greeting.repositories import CacheManager, OpenAILanguageModel
from visitor_greeting.services import (
    GreetingGenerator,
    GreetingPipeline,
    LocationResolver,
    WeatherResolver,
)

__all__ = [
    # Configuration
    "settings",
    "get_settings",
    # Protocols (interfaces)
    "CacheStore",
    "LanguageModel",
    "LocationProvider",
    "WeatherProvider",
    # Services (business logic)
    "GreetingGenerator",
    "GreetingPipeline",
    "LocationResolver",
    "WeatherResolver",
    # Handlers (HTTP)
    "GreetingHandler",
    # Repositories (data access)
    "CacheManager",
    "OpenAILanguageModel",
    # Entities (domain models)
    "DEFAULT_LOCATION",
    "GreetingEntity",
    "LocationEntity",
    "PersonalizedGreetingEntity",
    "WeatherEntity",
    # DTOs (API contracts)
    "GreetingResponse",
    "LocationResponse",
    # Errors
    "EntitlementError",
    "LanguageModelError",
    "ProviderError",
]
