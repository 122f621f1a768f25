"""Shared adapter logic for gateway-backed bus platforms."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from core.logging import get_logger
from core.result import Failure, failure, success
from services.providers.base import PROVIDER_NAMES, ProviderBuses, ProviderId
from services.providers.client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, BusApiClient
from services.providers.errors import ParseError
from services.providers.normalizer import normalize_records

if TYPE_CHECKING:
    from datetime import date

    from services.providers.base import ProviderOutcome, RawBusRecord, SearchQuery

logger = get_logger(__name__)


class GatewayPlatformAdapter:
    """
    Base adapter for a platform reachable through the search gateway.

    Subclasses declare the provider and endpoint, and override
    ``_format_date`` when the platform expects a different date convention.
    The transformation stays private to the adapter.

    Attributes:
        provider: Provider this adapter queries.
        endpoint: Gateway path of the platform's search endpoint.
    """

    provider: ClassVar[ProviderId]
    endpoint: ClassVar[str]

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        client: BusApiClient | None = None,
    ) -> None:
        """
        Initialize the adapter.

        Args:
            base_url: Gateway base URL.
            timeout: HTTP request timeout in seconds.
            client: Optional pre-configured client for testing.
        """
        self._client = client or BusApiClient(
            provider=self.provider.value,
            base_url=base_url,
            timeout=timeout,
        )

    @property
    def provider_id(self) -> ProviderId:
        """Return the provider identifier."""
        return self.provider

    @property
    def provider_name(self) -> str:
        """Return the provider display name."""
        return PROVIDER_NAMES.get(self.provider, self.provider.value)

    async def search(self, query: SearchQuery) -> ProviderOutcome:
        """
        Search the platform for buses on the query's route and date.

        Args:
            query: Validated search query.

        Returns:
            Result containing ProviderBuses or ProviderError.
        """
        result = await self._client.get_json(
            self.endpoint,
            params={
                "source": query.source,
                "destination": query.destination,
                "date": self._format_date(query.date),
            },
        )

        if isinstance(result, Failure):
            return failure(result.error)

        payload = result.value
        records = self._extract_records(payload)
        if records is None:
            logger.error(
                "Unexpected provider payload",
                provider=self.provider.value,
                payload_type=type(payload).__name__,
            )
            return failure(
                ParseError(
                    provider=self.provider.value,
                    message="Response has no bus list",
                )
            )

        buses = normalize_records(records, self.provider)
        total = payload.get("total_buses")
        if not isinstance(total, int) or isinstance(total, bool):
            total = len(records)

        logger.debug(
            "Provider search parsed",
            provider=self.provider.value,
            received=len(records),
            kept=len(buses),
        )
        return success(ProviderBuses(buses=buses, total_count=total))

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.close()

    def _format_date(self, travel_date: date) -> str:
        """Format the travel date for the platform (ISO by default)."""
        return travel_date.isoformat()

    def _extract_records(self, payload: Any) -> list[RawBusRecord] | None:
        """Return the raw bus list, or None if the payload is malformed."""
        if not isinstance(payload, dict):
            return None
        records = payload.get("buses")
        if not isinstance(records, list):
            return None
        return records
