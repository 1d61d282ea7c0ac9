"""Exceptions raised by providers and caught by the resolving services."""


class ProviderError(RuntimeError):
    """An external provider returned no usable data.

    Covers non-2xx responses, undecodable bodies and payloads that miss
    the fields a provider requires.
    """

    def __init__(self, provider: str, message: str) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider


class EntitlementError(ProviderError):
    """The API key is valid but not subscribed to this tier (HTTP 401)."""


class LanguageModelError(RuntimeError):
    """The language model call failed or returned no content."""
