"""HTTP client for the bus search gateway."""

from __future__ import annotations

from typing import Any

import httpx

from core.logging import get_logger
from core.result import Result, failure, success
from services.providers.errors import NetworkError, ParseError, ProviderError

logger = get_logger(__name__)

# Default timeout for API requests
DEFAULT_TIMEOUT = 20.0
# Default gateway URL
DEFAULT_BASE_URL = "http://localhost:8000"


class BusApiClient:
    """
    HTTP client for the provider search gateway.

    Each booking platform is exposed by the gateway under its own path. One
    client instance is bound to a single provider so transport failures are
    attributed to the right provider.

    Attributes:
        provider: Provider value used in error reports.
        base_url: Gateway base URL.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        provider: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """
        Initialize the client.

        Args:
            provider: Provider value used in error reports.
            base_url: Gateway base URL.
            timeout: Request timeout in seconds.

        Raises:
            ValueError: If base_url is empty.
        """
        if not base_url:
            msg = "base_url is required"
            raise ValueError(msg)

        self.provider = provider
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={
                    "Accept": "application/json",
                    "Content-Type": "application/json",
                },
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def get_json(
        self,
        path: str,
        params: dict[str, str] | None = None,
    ) -> Result[Any, ProviderError]:
        """
        Issue a GET request and decode the JSON body.

        Empty parameter values are not sent.

        Args:
            path: Gateway path.
            params: Query parameters.

        Returns:
            Result containing the decoded body or ProviderError.
        """
        query = {key: value for key, value in (params or {}).items() if value}
        client = await self._get_client()

        try:
            response = await client.get(path, params=query)
        except httpx.TimeoutException:
            logger.error("Provider request timeout", provider=self.provider, path=path)
            return failure(NetworkError(provider=self.provider, message="Request timeout"))
        except httpx.RequestError as e:
            logger.error("Provider request error", provider=self.provider, path=path)
            return failure(
                NetworkError(
                    provider=self.provider,
                    message="Request failed",
                    details=str(e),
                )
            )

        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> Result[Any, ProviderError]:
        """Convert an HTTP response into a Result."""
        if response.status_code >= 400:
            logger.error(
                "Provider API error",
                provider=self.provider,
                status_code=response.status_code,
            )
            return failure(
                NetworkError(
                    provider=self.provider,
                    message=f"API returned status {response.status_code}",
                    details=response.text[:500],
                )
            )

        try:
            return success(response.json())
        except ValueError as e:
            logger.error("Failed to decode provider response", provider=self.provider, error=str(e))
            return failure(ParseError(provider=self.provider, details=str(e)))
