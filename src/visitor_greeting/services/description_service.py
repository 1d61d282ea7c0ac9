"""Short project descriptions written by the language model."""

import logging

from visitor_greeting.entities import WeatherEntity
from visitor_greeting.protocols import LanguageModel

logger = logging.getLogger(__name__)

FALLBACK_DESCRIPTION = "A project built with modern web technologies."

SYSTEM_PROMPT = "You are a technical writer who creates concise, engaging project descriptions."


class ProjectDescriptionService:
    """Write a brief description for a portfolio project."""

    def __init__(self, language_model: LanguageModel) -> None:
        self._model = language_model

    async def describe(
        self,
        title: str,
        technologies: list[str],
        weather: WeatherEntity | None = None,
    ) -> str:
        """Return a description, or a generic sentence if the model fails.

        Args:
            title: Project title
            technologies: Technologies the project uses
            weather: Optional current weather to weave into the text
        """
        if not self._model.is_configured():
            return FALLBACK_DESCRIPTION

        prompt = (
            f'Write a brief description for a project called "{title}" '
            f"using technologies: {', '.join(technologies)}."
        )
        if weather is not None:
            prompt += f" Current weather: {weather.condition}, {weather.temperature}°F."

        try:
            content = await self._model.complete(
                SYSTEM_PROMPT,
                prompt,
                max_tokens=200,
                temperature=0.6,
            )
        except Exception as e:
            logger.warning("Project description generation failed: %s", e)
            return FALLBACK_DESCRIPTION

        return content.strip() or FALLBACK_DESCRIPTION
