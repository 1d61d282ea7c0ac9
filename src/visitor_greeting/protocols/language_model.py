"""Language model protocol.

Implementations can include:
- OpenAI chat completions (default)
- Any other chat-completion style API
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class LanguageModel(Protocol):
    """Protocol for chat-completion style text generation."""

    @property
    def model_name(self) -> str:
        """Return the name/identifier of the model."""
        ...

    def is_configured(self) -> bool:
        """Check whether credentials are present.

        Returns:
            True if calls can be attempted, False otherwise
        """
        ...

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        json_output: bool = False,
        max_tokens: int | None = None,
        temperature: float | None = None,
    ) -> str:
        """Generate a completion.

        Args:
            system_prompt: Instruction for the model
            user_prompt: The request content
            json_output: Ask the provider for a JSON object response
            max_tokens: Override the default completion length
            temperature: Override the default sampling temperature

        Returns:
            The raw text of the first choice

        Raises:
            LanguageModelError: If the call fails or returns no content
        """
        ...
