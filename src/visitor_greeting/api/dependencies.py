"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services built once per process in the lifespan (the composition root)
    - One CacheManager and one LogOnce shared by every service
    - Dependency functions retrieve from request.app.state
"""

import logging
import secrets
from contextlib import asynccontextmanager
from typing import Annotated

import httpx
from fastapi import Depends, FastAPI, Header, HTTPException, Request, status

from visitor_greeting.config import settings
from visitor_greeting.handlers import GreetingHandler
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
    ProjectDescriptionService,
    WeatherResolver,
)
from visitor_greeting.utils import LogOnce, setup_logging

logger = logging.getLogger(__name__)


def get_handler(request: Request) -> GreetingHandler:
    """Dependency injection for GreetingHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The GreetingHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "greeting_handler", None)
    if handler is None:
        raise RuntimeError("GreetingHandler not initialized. Check lifespan setup.")
    return handler


def require_admin(x_admin_token: str | None = Header(None)) -> None:
    """Guard for administrative endpoints.

    The caller must send ``X-Admin-Token`` matching ``ADMIN_TOKEN``. With
    no token configured the endpoints are disabled.

    Raises:
        HTTPException: 403 if disabled, 401 if the token is missing or wrong
    """
    if not settings.admin_token:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrative endpoints are disabled (ADMIN_TOKEN not set)",
        )
    if x_admin_token is None or not secrets.compare_digest(
        x_admin_token.encode(), settings.admin_token.encode()
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin token",
        )


def build_handler(
    http_client: httpx.AsyncClient,
    language_model: OpenAILanguageModel,
    cache: CacheManager | None = None,
) -> GreetingHandler:
    """Wire every layer together.

    Args:
        http_client: Shared client for the geolocation and weather providers
        language_model: Model used for greetings and project descriptions
        cache: Shared cache. A new one is created if None.

    Returns:
        A ready GreetingHandler
    """
    cache = cache or CacheManager()
    log_once = LogOnce(logging.getLogger("visitor_greeting.pipeline"))

    location_resolver = LocationResolver(
        cache=cache,
        providers=default_location_providers(client=http_client),
        log_once=log_once,
    )
    weather_resolver = WeatherResolver(
        cache=cache,
        providers=default_weather_providers(
            api_key=settings.openweather_api_key or "",
            base_url=settings.openweather_base_url,
            client=http_client,
        ),
        log_once=log_once,
    )
    greeting_generator = GreetingGenerator(
        cache=cache,
        language_model=language_model,
        log_once=log_once,
    )
    pipeline = GreetingPipeline(
        location_resolver=location_resolver,
        weather_resolver=weather_resolver,
        greeting_generator=greeting_generator,
    )
    return GreetingHandler(
        pipeline=pipeline,
        weather_resolver=weather_resolver,
        description_service=ProjectDescriptionService(language_model),
        cache=cache,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Shared HTTP client and language model
    2. Services sharing one cache
    3. Handler (HTTP endpoints) - stored in app.state.greeting_handler

    Args:
        app: The FastAPI application instance

    Yields:
        None

    Cleanup:
        Closes network clients and removes state on shutdown
    """
    setup_logging(settings.log_level, json_output=settings.log_json)

    http_client = httpx.AsyncClient(
        timeout=10.0,
        limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
    )
    language_model = OpenAILanguageModel.create()

    app.state.http_client = http_client
    app.state.language_model = language_model
    app.state.greeting_handler = build_handler(http_client, language_model)

    logger.info("Greeting service initialized (env=%s)", settings.app_env)
    if not settings.has_weather_key:
        logger.warning("OPENWEATHER_API_KEY not set, weather will be synthesized")
    if not settings.has_openai_key:
        logger.warning("OPENAI_API_KEY not set, greetings will use templates")

    yield

    await language_model.close()
    await http_client.aclose()
    del app.state.greeting_handler
    del app.state.language_model
    del app.state.http_client
    logger.info("Greeting service shut down")


# Type alias for cleaner dependency injection
HandlerDep = Annotated[GreetingHandler, Depends(get_handler)]
