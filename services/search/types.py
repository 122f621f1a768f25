"""Types for search aggregation and result querying."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING

from core.result import Success

if TYPE_CHECKING:
    from collections.abc import Mapping

    from services.providers.base import NormalizedBus, ProviderId, ProviderOutcome, SearchQuery


class DepartureBucket(str, Enum):
    """Time-of-day windows used to filter departures."""

    ANY = "any"
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"


class SortKey(str, Enum):
    """Sort options for a result view."""

    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    DURATION_ASC = "duration_asc"
    DEPARTURE_ASC = "departure_asc"
    DEPARTURE_DESC = "departure_desc"


@dataclass(frozen=True, slots=True)
class FilterCriteria:
    """
    Filters applied to an aggregated result.

    Attributes:
        min_price: Lowest fare to keep (inclusive).
        max_price: Highest fare to keep (inclusive), None for no upper bound.
        departure_bucket: Time-of-day window for departures.
        bus_type: Case-insensitive substring of the bus type, None for any.
        operator: Case-insensitive substring of the operator, None for any.
        provider: Only keep buses from this provider, None for any.
    """

    min_price: Decimal = Decimal("0")
    max_price: Decimal | None = None
    departure_bucket: DepartureBucket = DepartureBucket.ANY
    bus_type: str | None = None
    operator: str | None = None
    provider: ProviderId | None = None

    def __post_init__(self) -> None:
        """Validate the price range."""
        if self.min_price < 0:
            msg = "min_price cannot be negative"
            raise ValueError(msg)
        if self.max_price is not None and self.max_price < 0:
            msg = "max_price cannot be negative"
            raise ValueError(msg)
        if self.max_price is not None and self.min_price > self.max_price:
            msg = "min_price cannot be greater than max_price"
            raise ValueError(msg)

    @property
    def price_range(self) -> tuple[Decimal, Decimal | None]:
        """Return the (min, max) price range."""
        return (self.min_price, self.max_price)


@dataclass(frozen=True, slots=True)
class AggregatedSearchResult:
    """
    Merged result of one aggregated search.

    Attributes:
        query: The query that produced this result.
        buses: Buses from every successful provider, in provider declaration
            order then provider order. Not sorted for display.
        provider_status: Outcome of every provider, in declaration order.
        searched_at: When the search completed.
    """

    query: SearchQuery
    buses: tuple[NormalizedBus, ...]
    provider_status: Mapping[ProviderId, ProviderOutcome]
    searched_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def total_count(self) -> int:
        """Number of merged buses."""
        return len(self.buses)

    @property
    def successful_providers(self) -> list[ProviderId]:
        """Providers whose search succeeded."""
        return [p for p, outcome in self.provider_status.items() if isinstance(outcome, Success)]

    @property
    def failed_providers(self) -> list[ProviderId]:
        """Providers whose search failed."""
        return [
            p for p, outcome in self.provider_status.items() if not isinstance(outcome, Success)
        ]

    @property
    def lowest_price(self) -> Decimal | None:
        """Lowest fare over all merged buses, or None when there are none."""
        if not self.buses:
            return None
        return min(bus.price for bus in self.buses)
