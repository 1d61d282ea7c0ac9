from typing import Any

from fastapi import Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware

from visitor_greeting.api.dependencies import HandlerDep, lifespan, require_admin
from visitor_greeting.config import settings
from visitor_greeting.dto import (
    CacheStatsResponse,
    GreetingResponse,
    HealthCheckResponse,
    LocationResponse,
    ProjectDescriptionRequest,
    ProjectDescriptionResponse,
)
from visitor_greeting.utils import client_ip_from_headers

app = FastAPI(
    title="Visitor Greeting API",
    description="Location, weather and time aware greetings for portfolio visitors",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=["*"],
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["*"],
)


def client_ip(request: Request) -> str | None:
    """Extract the visitor IP from proxy headers or the socket peer."""
    return client_ip_from_headers(
        request.headers.get("x-forwarded-for"),
        request.headers.get("x-real-ip"),
        request.client.host if request.client else None,
    )


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Visitor Greeting API",
        "version": "0.1.0",
        "endpoints": {
            "greeting": "/api/greeting",
            "location": "/api/get-location",
            "project_description": "/api/project-description",
            "stats": "/stats",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health() -> HealthCheckResponse:
    """Health check endpoint.

    The service is healthy even without API keys; it degrades instead.
    """
    return HealthCheckResponse(
        status="healthy",
        weather_api_configured=settings.has_weather_key,
        language_model_configured=settings.has_openai_key,
    )


@app.get("/api/greeting", response_model=GreetingResponse)
async def greeting(
    request: Request,
    handler: HandlerDep,
    lat: float | None = Query(None, description="Browser GPS latitude"),
    lon: float | None = Query(None, description="Browser GPS longitude"),
    timezone: str | None = Query(None, max_length=64, description="Browser IANA timezone"),
) -> GreetingResponse:
    """Personalized greeting for the calling visitor."""
    return await handler.get_greeting(ip=client_ip(request), lat=lat, lon=lon, timezone=timezone)


@app.get("/api/get-location", response_model=LocationResponse)
async def get_location(request: Request, handler: HandlerDep) -> LocationResponse:
    """Best-effort location of the calling visitor."""
    return await handler.get_location(client_ip(request))


@app.post("/api/project-description", response_model=ProjectDescriptionResponse)
async def project_description(
    request: ProjectDescriptionRequest,
    handler: HandlerDep,
) -> ProjectDescriptionResponse:
    """Generate a short description for a portfolio project."""
    return await handler.describe_project(request)


@app.get("/stats", response_model=CacheStatsResponse)
async def get_stats(handler: HandlerDep) -> CacheStatsResponse:
    """Get cache statistics."""
    return handler.get_stats()


@app.delete("/cache", response_model=dict[str, Any], dependencies=[Depends(require_admin)])
async def clear_cache(handler: HandlerDep) -> dict[str, Any]:
    """Clear all entries from the shared cache (requires X-Admin-Token)."""
    return handler.clear_cache()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "visitor_greeting.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
