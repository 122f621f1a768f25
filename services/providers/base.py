"""Base types and protocols for bus search providers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from datetime import date
    from decimal import Decimal

    from core.result import Result
    from services.providers.errors import ProviderError


type RawBusRecord = dict[str, Any]


class ProviderId(str, Enum):
    """Booking platforms the aggregator knows how to query."""

    ABHIBUS = "abhibus"
    MAKEMYTRIP = "makemytrip"
    PAYTM = "paytm"
    GOIBIBO = "goibibo"


PROVIDER_NAMES: dict[ProviderId, str] = {
    ProviderId.ABHIBUS: "AbhiBus",
    ProviderId.MAKEMYTRIP: "MakeMyTrip",
    ProviderId.PAYTM: "Paytm",
    ProviderId.GOIBIBO: "Goibibo",
}


@dataclass(frozen=True, slots=True)
class SearchQuery:
    """
    A bus search for one route and travel date.

    Attributes:
        source: Origin city name.
        destination: Destination city name.
        date: Travel date.
    """

    source: str
    destination: str
    date: date

    @property
    def cache_key(self) -> str:
        """Stable key identifying this query."""
        return f"{self.source.lower()}:{self.destination.lower()}:{self.date.isoformat()}"


@dataclass(frozen=True, slots=True)
class NormalizedBus:
    """
    A bus offer in the canonical shape shared by all providers.

    Attributes:
        id: Identifier, unique within one provider's result set.
        operator: Operator (travels) name.
        departure_time: Departure time as zero-padded 24h ``HH:MM``.
        arrival_time: Arrival time as zero-padded 24h ``HH:MM``.
        duration_minutes: Trip duration, parsed once at normalization time.
        duration_label: Provider's original duration text, for display.
        bus_type: Bus type label (e.g. 'A/C Sleeper (2+1)').
        amenities: Amenity tags derived from the bus type.
        available_seats: Number of seats left.
        price: Fare.
        rating: Rating in [0, 5].
        provider: Provider that listed the offer.
    """

    id: str
    operator: str
    departure_time: str
    arrival_time: str
    duration_minutes: int
    bus_type: str
    amenities: frozenset[str]
    available_seats: int
    price: Decimal
    rating: float
    provider: ProviderId
    duration_label: str = ""

    @property
    def departure_hour(self) -> int:
        """Hour component of the departure time."""
        return int(self.departure_time[:2])


@dataclass(frozen=True, slots=True)
class ProviderBuses:
    """
    Normalized result of one provider search.

    Attributes:
        buses: Normalized buses in provider order.
        total_count: Total count reported by the provider.
    """

    buses: tuple[NormalizedBus, ...]
    total_count: int

    @property
    def count(self) -> int:
        """Return number of buses kept after normalization."""
        return len(self.buses)


type ProviderOutcome = Result[ProviderBuses, ProviderError]


@runtime_checkable
class BusProvider(Protocol):
    """
    Protocol defining the interface for provider adapters.

    Every booking platform is reached through one implementation. The
    aggregation coordinator only ever talks to this interface.
    """

    @property
    def provider_id(self) -> ProviderId:
        """Return the provider identifier."""
        ...

    @property
    def provider_name(self) -> str:
        """Return the provider display name."""
        ...

    async def search(self, query: SearchQuery) -> ProviderOutcome:
        """
        Search the provider for buses matching the query.

        Must not raise; every failure is returned as a Failure.

        Args:
            query: Validated search query.

        Returns:
            Result containing ProviderBuses or ProviderError.
        """
        ...

    async def close(self) -> None:
        """Release resources held by the adapter."""
        ...
