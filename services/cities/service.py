"""Client for the external city name suggestion service."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from core.logging import get_logger
from core.result import Failure, Result, failure, success
from services.cities.types import CitySuggestion
from services.providers.client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, BusApiClient
from services.providers.errors import ParseError, ProviderError

if TYPE_CHECKING:
    from core.config import ProviderSettings

logger = get_logger(__name__)

SUGGESTIONS_ENDPOINT = "/AbhiBusAPI/city-suggestions/"
SERVICE_NAME = "city-suggestions"


class CitySuggestionClient:
    """
    Looks up city names matching a partial text.

    The search core does not depend on this service; it only feeds the
    caller's autocomplete.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        client: BusApiClient | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Gateway base URL.
            timeout: Request timeout in seconds.
            client: Optional pre-configured client for testing.
        """
        self._client = client or BusApiClient(
            provider=SERVICE_NAME,
            base_url=base_url,
            timeout=timeout,
        )

    @classmethod
    def from_settings(cls, settings: ProviderSettings) -> CitySuggestionClient:
        """Create a client from provider settings."""
        return cls(base_url=settings.base_url, timeout=settings.request_timeout)

    async def suggest(self, text: str) -> Result[tuple[CitySuggestion, ...], ProviderError]:
        """
        Return cities matching a partial name.

        Args:
            text: Partial city name.

        Returns:
            Result containing the suggestions or ProviderError.
        """
        text = text.strip()
        if not text:
            return success(())

        result = await self._client.get_json(SUGGESTIONS_ENDPOINT, params={"query": text})
        if isinstance(result, Failure):
            return failure(result.error)

        payload = result.value
        matches = payload.get("matches") if isinstance(payload, dict) else payload
        if not isinstance(matches, list):
            return failure(ParseError(provider=SERVICE_NAME, message="Response has no matches"))

        suggestions = []
        for item in matches:
            suggestion = self._parse_suggestion(item)
            if suggestion is not None:
                suggestions.append(suggestion)
        return success(tuple(suggestions))

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.close()

    def _parse_suggestion(self, item: Any) -> CitySuggestion | None:
        """Parse one match, or None if it is unusable."""
        if not isinstance(item, dict):
            return None
        name = str(item.get("display_text") or "").strip()
        if not name or item.get("id") is None:
            logger.debug("Skipping city suggestion without name or id", item=item)
            return None
        region = item.get("state") or item.get("display_subtext")
        return CitySuggestion(
            id=str(item["id"]),
            display_name=name,
            region=str(region) if region else None,
        )
