"""
Caller-owned storage for search results and the last query.

The aggregation core never reads or writes these. Callers such as the HTTP
API inject a store explicitly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from services.cache import CacheService, CacheTTL, cache_service

if TYPE_CHECKING:
    from services.providers.base import SearchQuery
    from services.search.types import AggregatedSearchResult


@runtime_checkable
class LastQueryStore(Protocol):
    """Persists the most recent query of one client."""

    def load(self) -> SearchQuery | None:
        """Return the last saved query, if any."""
        ...

    def save(self, query: SearchQuery) -> None:
        """Remember a query as the last one."""
        ...


class InMemoryLastQueryStore:
    """Process-local last-query store."""

    def __init__(self) -> None:
        """Initialize with no saved query."""
        self._query: SearchQuery | None = None

    def load(self) -> SearchQuery | None:
        """Return the last saved query, if any."""
        return self._query

    def save(self, query: SearchQuery) -> None:
        """Remember a query as the last one."""
        self._query = query


class CacheLastQueryStore:
    """Last-query store keyed by a client identifier in the Django cache."""

    def __init__(
        self,
        owner: str,
        cache: CacheService | None = None,
        ttl: int = CacheTTL.LAST_QUERY,
    ) -> None:
        """
        Initialize the store.

        Args:
            owner: Client identifier, e.g. a session key.
            cache: Cache service to use.
            ttl: Time-to-live in seconds.

        Raises:
            ValueError: If owner is empty.
        """
        if not owner:
            msg = "owner cannot be empty"
            raise ValueError(msg)
        self._key = CacheService.make_last_query_key(owner)
        self._cache = cache or cache_service
        self._ttl = ttl

    def load(self) -> SearchQuery | None:
        """Return the last saved query, if any."""
        return self._cache.get(self._key)

    def save(self, query: SearchQuery) -> None:
        """Remember a query as the last one."""
        self._cache.set(self._key, query, ttl=self._ttl)


class SearchResultCache:
    """
    Holds aggregated results so filter and sort changes never re-query
    providers.
    """

    def __init__(
        self,
        cache: CacheService | None = None,
        ttl: int = CacheTTL.SEARCH_RESULTS,
    ) -> None:
        """
        Initialize the result cache.

        Args:
            cache: Cache service to use.
            ttl: Time-to-live in seconds.
        """
        self._cache = cache or cache_service
        self._ttl = ttl

    @staticmethod
    def search_id_for(query: SearchQuery) -> str:
        """Return the search id under which a query's result is stored."""
        return CacheService.make_search_id(query.cache_key)

    def store(self, result: AggregatedSearchResult) -> str:
        """
        Store a result.

        Returns:
            The search id to read it back with.
        """
        search_id = self.search_id_for(result.query)
        self._cache.set(CacheService.make_search_key(search_id), result, ttl=self._ttl)
        return search_id

    def get(self, search_id: str) -> AggregatedSearchResult | None:
        """Return a stored result, or None if unknown or expired."""
        return self._cache.get(CacheService.make_search_key(search_id))
