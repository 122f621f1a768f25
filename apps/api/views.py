"""API views for bus search."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Any

from asgiref.sync import async_to_sync
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.serializers import (
    BusSerializer,
    CitySuggestionSerializer,
    HealthCheckSerializer,
    ProviderSerializer,
    ResultQuerySerializer,
    SearchInputSerializer,
    SearchQuerySerializer,
    format_price,
    serialize_provider_status,
)
from core.config import get_settings
from core.logging import bound_context, get_logger
from core.result import Failure
from services.cache import cache_service
from services.cities import CitySuggestionClient
from services.providers.base import PROVIDER_NAMES, ProviderId, SearchQuery
from services.providers.registry import build_default_registry
from services.search.coordinator import AggregationCoordinator
from services.search.query import count_by_provider, query_results
from services.search.storage import CacheLastQueryStore, SearchResultCache
from services.search.types import FilterCriteria, SortKey

if TYPE_CHECKING:
    from core.result import Result
    from services.cities.types import CitySuggestion
    from services.providers.errors import ProviderError, QueryValidationError
    from services.search.types import AggregatedSearchResult

logger = get_logger(__name__)

CLIENT_ID_SESSION_KEY = "client_id"


def get_result_cache() -> SearchResultCache:
    """Return the result cache used by the API."""
    return SearchResultCache(ttl=get_settings().cache.result_ttl)


def get_last_query_store(request: Request) -> CacheLastQueryStore:
    """Return the last-query store for the requesting client."""
    client_id = request.session.get(CLIENT_ID_SESSION_KEY)
    if not client_id:
        client_id = uuid.uuid4().hex
        request.session[CLIENT_ID_SESSION_KEY] = client_id
    return CacheLastQueryStore(owner=client_id, ttl=get_settings().cache.last_query_ttl)


async def run_search(
    query: SearchQuery,
) -> Result[AggregatedSearchResult, QueryValidationError]:
    """Run one aggregated search with freshly built provider adapters."""
    settings = get_settings()
    coordinator = AggregationCoordinator(
        registry=build_default_registry(settings.providers),
        provider_timeout=settings.providers.timeout,
    )
    try:
        return await coordinator.run_aggregated_search(query)
    finally:
        await coordinator.close()


async def fetch_city_suggestions(text: str) -> Result[tuple[CitySuggestion, ...], ProviderError]:
    """Look up city suggestions for a partial name."""
    client = CitySuggestionClient.from_settings(get_settings().providers)
    try:
        return await client.suggest(text)
    finally:
        await client.close()


def build_result_view(
    search_id: str,
    result: AggregatedSearchResult,
    filters: FilterCriteria,
    sort: SortKey,
) -> dict[str, Any]:
    """Build the response payload for one view of a cached result."""
    buses = query_results(result, filters, sort)
    lowest = result.lowest_price
    counts = count_by_provider(result)
    return {
        "search_id": search_id,
        "query": SearchQuerySerializer(result.query).data,
        "searched_at": result.searched_at.isoformat(),
        "provider_status": serialize_provider_status(dict(result.provider_status), counts),
        "provider_counts": {provider.value: count for provider, count in counts.items()},
        "lowest_price": format_price(lowest) if lowest is not None else None,
        "total_count": result.total_count,
        "count": len(buses),
        "sort": sort.value,
        "buses": BusSerializer(buses, many=True, context={"lowest_price": lowest}).data,
    }


class SearchView(APIView):
    """
    Run an aggregated search across all enabled providers.

    The result is cached; filter and sort changes are served by
    SearchResultsView without querying providers again.
    """

    def post(self, request: Request) -> Response:
        """Search for buses on a route and date."""
        input_serializer = SearchInputSerializer(data=request.data)
        if not input_serializer.is_valid():
            return Response(input_serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        data = input_serializer.validated_data
        query = SearchQuery(
            source=data["source"],
            destination=data["destination"],
            date=data["date"],
        )

        result = async_to_sync(run_search)(query)
        if isinstance(result, Failure):
            return Response(
                {"error": result.error.message, "field": result.error.field},
                status=status.HTTP_400_BAD_REQUEST,
            )

        aggregated = result.value
        search_id = get_result_cache().store(aggregated)
        with bound_context(search_id=search_id):
            get_last_query_store(request).save(query)

            if not aggregated.buses:
                logger.warning(
                    "Search returned no buses",
                    failed=[p.value for p in aggregated.failed_providers],
                )

            payload = build_result_view(search_id, aggregated, FilterCriteria(), SortKey.PRICE_ASC)
        return Response(payload, status=status.HTTP_200_OK)


class SearchResultsView(APIView):
    """Filter and sort a cached search result."""

    def get(self, request: Request, search_id: str) -> Response:
        """Return one filtered, sorted view of a cached result."""
        result = get_result_cache().get(search_id)
        if result is None:
            return Response(
                {"error": "Search not found or expired"},
                status=status.HTTP_404_NOT_FOUND,
            )

        query_serializer = ResultQuerySerializer(data=request.query_params)
        if not query_serializer.is_valid():
            return Response(query_serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        payload = build_result_view(
            search_id,
            result,
            query_serializer.to_filters(),
            query_serializer.to_sort(),
        )
        return Response(payload, status=status.HTTP_200_OK)


class LastSearchView(APIView):
    """Return the last query searched by this client."""

    def get(self, request: Request) -> Response:
        """Return the last query, if any."""
        query = get_last_query_store(request).load()
        if query is None:
            return Response(
                {"error": "No previous search"},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(SearchQuerySerializer(query).data)


class CitySuggestionsView(APIView):
    """City name autocomplete."""

    def get(self, request: Request) -> Response:
        """Return cities matching the ``query`` parameter."""
        text = request.query_params.get("query", "")
        result = async_to_sync(fetch_city_suggestions)(text)
        if isinstance(result, Failure):
            logger.warning("City suggestions unavailable", error=str(result.error))
            return Response({"query": text, "matches": []})

        return Response(
            {
                "query": text,
                "matches": CitySuggestionSerializer(result.value, many=True).data,
            }
        )


class ProvidersView(APIView):
    """List the known providers and whether they are enabled."""

    def get(self, request: Request) -> Response:
        """Return provider list."""
        enabled = set(get_settings().providers.enabled)
        providers = [
            {
                "code": provider.value,
                "name": PROVIDER_NAMES[provider],
                "is_enabled": provider.value in enabled,
            }
            for provider in ProviderId
        ]
        return Response(ProviderSerializer(providers, many=True).data)


class HealthCheckView(APIView):
    """
    API health check endpoint.

    Returns the health status of the API and its dependencies.
    """

    def get(self, request: Request) -> Response:
        """Return health status."""
        cache_ok = cache_service.healthcheck()
        health_data = {
            "status": "healthy" if cache_ok else "degraded",
            "version": "0.1.0",
            "services": {
                "cache": cache_ok,
            },
        }

        serializer = HealthCheckSerializer(data=health_data)
        serializer.is_valid()
        return Response(serializer.data)
