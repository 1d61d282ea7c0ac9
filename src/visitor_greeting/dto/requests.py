"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field


class ProjectDescriptionRequest(BaseModel):
    """Request DTO for generating a project description."""

    title: str = Field(..., description="Project title", min_length=1, max_length=200)
    technologies: list[str] = Field(
        default_factory=list,
        description="Technologies used by the project",
        max_length=30,
    )
    lat: float | None = Field(None, description="Latitude for optional weather context")
    lon: float | None = Field(None, description="Longitude for optional weather context")
