"""Shared HTTP plumbing for JSON-over-GET providers."""

from typing import Any

import httpx

from visitor_greeting.errors import EntitlementError, ProviderError


class HttpJsonProvider:
    """Base class for providers that GET a URL and decode a JSON object.

    Owns a lazily created ``httpx.AsyncClient`` unless one is injected,
    in which case the caller owns its lifetime.
    """

    name = "http"

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the provider.

        Args:
            base_url: API base URL, without trailing slash
            timeout: Transport timeout in seconds
            client: Shared HTTP client. If None, one is created on first use.
        """
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """GET ``base_url + path`` and return the decoded JSON object.

        Raises:
            EntitlementError: On HTTP 401
            ProviderError: On any other non-2xx status or a non-object body
            httpx.HTTPError: On transport failures
        """
        response = await self.client.get(f"{self._base_url}{path}", params=params)

        if response.status_code == 401:
            raise EntitlementError(self.name, "HTTP 401, key not entitled to this endpoint")
        if not response.is_success:
            raise ProviderError(self.name, f"HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(self.name, "response body is not JSON") from e

        if not isinstance(data, dict):
            raise ProviderError(self.name, f"unexpected response type {type(data).__name__}")
        return data

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
