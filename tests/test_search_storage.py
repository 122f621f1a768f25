"""Tests for result cache and last-query stores."""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import TYPE_CHECKING
from unittest.mock import MagicMock

import pytest

from core.result import success
from services.cache import CacheService
from services.providers.base import ProviderBuses, ProviderId, SearchQuery
from services.search.storage import (
    CacheLastQueryStore,
    InMemoryLastQueryStore,
    LastQueryStore,
    SearchResultCache,
)
from services.search.types import AggregatedSearchResult

if TYPE_CHECKING:
    from collections.abc import Callable

    from services.providers.base import NormalizedBus


class TestInMemoryLastQueryStore:
    """Tests for InMemoryLastQueryStore."""

    def test_satisfies_protocol(self) -> None:
        """The store should implement LastQueryStore."""
        assert isinstance(InMemoryLastQueryStore(), LastQueryStore)

    def test_empty(self) -> None:
        """A new store should hold no query."""
        assert InMemoryLastQueryStore().load() is None

    def test_save_overwrites(self, search_query: SearchQuery) -> None:
        """The latest saved query should win."""
        store = InMemoryLastQueryStore()
        later = replace(search_query, date=date(2026, 12, 24))

        store.save(search_query)
        store.save(later)

        assert store.load() == later


class TestCacheLastQueryStore:
    """Tests for CacheLastQueryStore."""

    def test_satisfies_protocol(self) -> None:
        """The store should implement LastQueryStore."""
        assert isinstance(CacheLastQueryStore("client1"), LastQueryStore)

    def test_empty_owner_raises(self) -> None:
        """An empty owner should raise ValueError."""
        with pytest.raises(ValueError, match="owner cannot be empty"):
            CacheLastQueryStore("")

    def test_round_trip(self, search_query: SearchQuery) -> None:
        """A saved query should load back from the cache."""
        CacheLastQueryStore("client1").save(search_query)

        assert CacheLastQueryStore("client1").load() == search_query

    def test_owners_are_isolated(self, search_query: SearchQuery) -> None:
        """One client's query should not be visible to another."""
        CacheLastQueryStore("client1").save(search_query)

        assert CacheLastQueryStore("client2").load() is None

    def test_uses_ttl(self, search_query: SearchQuery) -> None:
        """save should pass the TTL to the cache service."""
        cache = MagicMock(spec=CacheService)
        store = CacheLastQueryStore("client1", cache=cache, ttl=60)

        store.save(search_query)

        cache.set.assert_called_once_with("last_query:client1", search_query, ttl=60)


class TestSearchResultCache:
    """Tests for SearchResultCache."""

    @pytest.fixture()
    def result(
        self,
        search_query: SearchQuery,
        make_bus: Callable[..., NormalizedBus],
    ) -> AggregatedSearchResult:
        """Create an aggregated result."""
        bus = make_bus(price=800, provider=ProviderId.PAYTM)
        return AggregatedSearchResult(
            query=search_query,
            buses=(bus,),
            provider_status={ProviderId.PAYTM: success(ProviderBuses(buses=(bus,), total_count=1))},
        )

    def test_store_and_get(self, result: AggregatedSearchResult) -> None:
        """A stored result should be readable by its search id."""
        cache = SearchResultCache()

        search_id = cache.store(result)
        cached = cache.get(search_id)

        assert cached is not None
        assert cached.buses == result.buses
        assert cached.query == result.query
        assert cached.lowest_price == result.lowest_price

    def test_search_id_is_stable(self, search_query: SearchQuery) -> None:
        """The same query should always map to the same search id."""
        assert SearchResultCache.search_id_for(search_query) == SearchResultCache.search_id_for(
            replace(search_query)
        )

    def test_search_id_ignores_case(self, search_query: SearchQuery) -> None:
        """City case should not change the search id."""
        shouted = replace(search_query, source=search_query.source.upper())

        assert SearchResultCache.search_id_for(shouted) == SearchResultCache.search_id_for(
            search_query
        )

    def test_unknown_id(self) -> None:
        """An unknown search id should give None."""
        assert SearchResultCache().get("0000000000000000") is None

    def test_uses_ttl(self, result: AggregatedSearchResult) -> None:
        """store should pass the TTL to the cache service."""
        cache = MagicMock(spec=CacheService)

        SearchResultCache(cache=cache, ttl=120).store(result)

        assert cache.set.call_args.kwargs["ttl"] == 120
