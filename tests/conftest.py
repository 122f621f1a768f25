"""
Pytest configuration and fixtures for the test suite.

This module contains shared fixtures used across all tests.
"""

from __future__ import annotations

import asyncio
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Any

import pytest
from django.core.cache import cache
from django.test import Client

from core.result import success
from services.providers.base import NormalizedBus, ProviderBuses, ProviderId, SearchQuery

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from services.providers.base import ProviderOutcome


class FakeProvider:
    """
    In-memory BusProvider for coordinator and API tests.

    Returns a fixed outcome, optionally after a delay, or raises a fixed
    exception.
    """

    def __init__(
        self,
        provider: ProviderId,
        outcome: ProviderOutcome | None = None,
        delay: float = 0.0,
        error: Exception | None = None,
    ) -> None:
        self.provider = provider
        self.outcome = outcome or success(ProviderBuses(buses=(), total_count=0))
        self.delay = delay
        self.error = error
        self.calls: list[SearchQuery] = []
        self.cancelled = False
        self.closed = False

    @property
    def provider_id(self) -> ProviderId:
        return self.provider

    @property
    def provider_name(self) -> str:
        return self.provider.value

    async def search(self, query: SearchQuery) -> ProviderOutcome:
        self.calls.append(query)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        if self.error is not None:
            raise self.error
        return self.outcome

    async def close(self) -> None:
        self.closed = True


@pytest.fixture()
def test_client() -> Client:
    """Return a Django test client."""
    return Client()


@pytest.fixture(autouse=True)
def clear_cache() -> Iterator[None]:
    """Start every test with an empty cache."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture()
def search_query() -> SearchQuery:
    """Return a valid search query."""
    return SearchQuery(source="Hyderabad", destination="Bangalore", date=date(2026, 11, 2))


@pytest.fixture()
def make_bus() -> Callable[..., NormalizedBus]:
    """Return a factory for NormalizedBus instances."""

    def factory(
        price: str | int = 1000,
        departure_time: str = "21:00",
        provider: ProviderId = ProviderId.ABHIBUS,
        operator: str = "Orange Tours",
        bus_type: str = "A/C Sleeper (2+1)",
        duration_minutes: int = 480,
        **overrides: Any,
    ) -> NormalizedBus:
        fields: dict[str, Any] = {
            "id": f"{provider.value}-{operator.lower().replace(' ', '-')}-{departure_time}-{price}",
            "operator": operator,
            "departure_time": departure_time,
            "arrival_time": "06:00",
            "duration_minutes": duration_minutes,
            "bus_type": bus_type,
            "amenities": frozenset(),
            "available_seats": 20,
            "price": Decimal(str(price)),
            "rating": 0.0,
            "provider": provider,
        }
        fields.update(overrides)
        return NormalizedBus(**fields)

    return factory


@pytest.fixture()
def provider_buses() -> Callable[..., ProviderOutcome]:
    """Return a factory for successful provider outcomes."""

    def factory(*buses: NormalizedBus) -> ProviderOutcome:
        return success(ProviderBuses(buses=tuple(buses), total_count=len(buses)))

    return factory


@pytest.fixture()
def fake_provider() -> type[FakeProvider]:
    """Return the in-memory provider class."""
    return FakeProvider
