"""Aggregation coordinator for concurrent multi-provider bus searches."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from core.logging import bound_context, get_logger
from core.result import Failure, Result, failure, success
from services.providers.errors import NetworkError, QueryValidationError, TimeoutFailure
from services.search.types import AggregatedSearchResult

if TYPE_CHECKING:
    from services.providers.base import (
        BusProvider,
        NormalizedBus,
        ProviderId,
        ProviderOutcome,
        SearchQuery,
    )
    from services.providers.registry import ProviderRegistry

logger = get_logger(__name__)

DEFAULT_PROVIDER_TIMEOUT = 15.0


def validate_query(query: SearchQuery) -> Result[SearchQuery, QueryValidationError]:
    """
    Check that a query can be sent to providers.

    Source and destination must be non-empty and carry no surrounding
    whitespace. Callers trim user input; an untrimmed value here is a bug in
    the caller, not something to fix silently.
    """
    for field_name in ("source", "destination"):
        value = getattr(query, field_name)
        if not isinstance(value, str) or not value:
            return failure(QueryValidationError(f"{field_name} is required", field=field_name))
        if value != value.strip():
            return failure(
                QueryValidationError(
                    f"{field_name} must not have leading or trailing whitespace",
                    field=field_name,
                )
            )
    return success(query)


class AggregationCoordinator:
    """
    Runs one search against every registered provider concurrently.

    Each provider is raced against the same timeout. The coordinator waits
    for every provider to settle, merges the successful bus lists in
    registration order, and reports the outcome of every provider. Provider
    failures never fail the search as a whole.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        provider_timeout: float = DEFAULT_PROVIDER_TIMEOUT,
    ) -> None:
        """
        Initialize the coordinator.

        Args:
            registry: Registry holding the provider adapters.
            provider_timeout: Per-provider timeout in seconds.

        Raises:
            ValueError: If provider_timeout is not positive.
        """
        if provider_timeout <= 0:
            msg = "provider_timeout must be positive"
            raise ValueError(msg)
        self._registry = registry
        self._provider_timeout = provider_timeout

    @property
    def provider_timeout(self) -> float:
        """Per-provider timeout in seconds."""
        return self._provider_timeout

    async def run_aggregated_search(
        self,
        query: SearchQuery,
    ) -> Result[AggregatedSearchResult, QueryValidationError]:
        """
        Execute a search across all registered providers.

        Args:
            query: The search query.

        Returns:
            Result containing the aggregated result, or the validation error
            if the query was rejected before any provider was called.
        """
        validation = validate_query(query)
        if isinstance(validation, Failure):
            logger.info(
                "Rejected search query",
                field=validation.error.field,
                error=validation.error.message,
            )
            return failure(validation.error)

        providers = self._registry.providers
        outcomes = await asyncio.gather(
            *(self._search_provider(provider, query) for provider in providers)
        )

        provider_status: dict[ProviderId, ProviderOutcome] = {}
        buses: list[NormalizedBus] = []
        for provider, outcome in zip(providers, outcomes, strict=True):
            provider_status[provider.provider_id] = outcome
            if not isinstance(outcome, Failure):
                buses.extend(outcome.value.buses)

        result = AggregatedSearchResult(
            query=query,
            buses=tuple(buses),
            provider_status=provider_status,
        )

        logger.info(
            "Aggregated search completed",
            source=query.source,
            destination=query.destination,
            date=query.date.isoformat(),
            providers=len(providers),
            successful=[p.value for p in result.successful_providers],
            failed=[p.value for p in result.failed_providers],
            total_results=result.total_count,
        )

        return success(result)

    async def _search_provider(
        self,
        provider: BusProvider,
        query: SearchQuery,
    ) -> ProviderOutcome:
        """
        Search one provider, bounded by the per-provider timeout.

        On timeout the provider coroutine is cancelled by ``asyncio.wait_for``.
        Never raises.
        """
        provider_value = provider.provider_id.value
        try:
            with bound_context(provider=provider_value):
                return await asyncio.wait_for(
                    provider.search(query),
                    timeout=self._provider_timeout,
                )
        except TimeoutError:
            logger.warning(
                "Provider search timed out",
                provider=provider_value,
                timeout=self._provider_timeout,
            )
            return failure(TimeoutFailure(provider=provider_value, timeout=self._provider_timeout))
        except Exception as e:
            logger.error(
                "Provider search failed",
                provider=provider_value,
                error=str(e),
            )
            return failure(
                NetworkError(
                    provider=provider_value,
                    message="Unexpected provider error",
                    details=str(e),
                )
            )

    async def close(self) -> None:
        """Close all provider adapters."""
        await self._registry.close()
