"""OpenAI implementation of LanguageModel.

Uses the async client from the ``openai`` package. The client is created
lazily so a missing key never fails application startup; callers check
``is_configured()`` and fall back instead.
"""

from openai import AsyncOpenAI, OpenAIError

from visitor_greeting.config import settings
from visitor_greeting.errors import LanguageModelError


class OpenAILanguageModel:
    """OpenAI chat completions.

    This class satisfies the LanguageModel protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        model = OpenAILanguageModel.create()
        if model.is_configured():
            text = await model.complete("You are terse.", "Say hi", json_output=False)
        ```
    """

    def __init__(
        self,
        api_key: str | None = None,
        model_name: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        timeout: float | None = None,
        client: AsyncOpenAI | None = None,
    ) -> None:
        """Initialize the model adapter.

        Args:
            api_key: OpenAI API key. Defaults to settings.openai_api_key.
            model_name: Chat model. Defaults to settings.openai_model.
            temperature: Default sampling temperature.
            max_tokens: Default completion length.
            timeout: Request timeout in seconds.
            client: Preconfigured client (mainly for tests).
        """
        self._api_key = api_key or settings.openai_api_key
        self._model_name = model_name or settings.openai_model
        self._temperature = temperature if temperature is not None else settings.openai_temperature
        self._max_tokens = max_tokens or settings.openai_max_tokens
        self._timeout = timeout or settings.openai_timeout
        self._client = client

    @classmethod
    def create(
        cls,
        api_key: str | None = None,
        model_name: str | None = None,
    ) -> "OpenAILanguageModel":
        """Factory method to create OpenAILanguageModel with defaults.

        Args:
            api_key: API key. If None, uses settings.
            model_name: Model name. If None, uses settings.

        Returns:
            Configured OpenAILanguageModel
        """
        return cls(api_key=api_key, model_name=model_name)

    @property
    def client(self) -> AsyncOpenAI:
        """Lazy-load the async OpenAI client."""
        if self._client is None:
            self._client = AsyncOpenAI(api_key=self._api_key, timeout=self._timeout)
        return self._client

    @property
    def model_name(self) -> str:
        return self._model_name

    def is_configured(self) -> bool:
        return self._client is not None or bool(self._api_key)

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        json_output: bool = False,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> str:
        if not self.is_configured():
            raise LanguageModelError("OpenAI API key is not configured")

        kwargs = {}
        if json_output:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            completion = await self.client.chat.completions.create(
                model=self._model_name,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                max_tokens=max_tokens or self._max_tokens,
                temperature=temperature if temperature is not None else self._temperature,
                **kwargs,
            )
        except OpenAIError as e:
            raise LanguageModelError(f"OpenAI API error: {e}") from e

        content = completion.choices[0].message.content if completion.choices else None
        if not content:
            raise LanguageModelError("No response content from OpenAI")
        return content

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.close()
            self._client = None
