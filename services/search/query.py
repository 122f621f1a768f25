"""
Filtering and sorting over an aggregated result.

Everything here is a pure function of its arguments: no I/O and no mutation
of the input, so the same cached result can serve any number of views.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from services.search.types import DepartureBucket, FilterCriteria, SortKey

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence
    from decimal import Decimal

    from services.providers.base import NormalizedBus, ProviderId
    from services.search.types import AggregatedSearchResult


# Bucket -> [start hour, end hour); NIGHT wraps midnight and is handled apart
BUCKET_HOURS: dict[DepartureBucket, tuple[int, int]] = {
    DepartureBucket.MORNING: (6, 12),
    DepartureBucket.AFTERNOON: (12, 18),
    DepartureBucket.EVENING: (18, 22),
}

# key function, reverse
SORT_KEYS: dict[SortKey, tuple[Callable[[NormalizedBus], object], bool]] = {
    SortKey.PRICE_ASC: (lambda bus: bus.price, False),
    SortKey.PRICE_DESC: (lambda bus: bus.price, True),
    SortKey.DURATION_ASC: (lambda bus: bus.duration_minutes, False),
    SortKey.DEPARTURE_ASC: (lambda bus: bus.departure_time, False),
    SortKey.DEPARTURE_DESC: (lambda bus: bus.departure_time, True),
}


def departure_bucket(departure_time: str) -> DepartureBucket:
    """Classify an ``HH:MM`` departure time into its time-of-day bucket."""
    hour = int(departure_time[:2])
    for bucket, (start, end) in BUCKET_HOURS.items():
        if start <= hour < end:
            return bucket
    return DepartureBucket.NIGHT


def matches(bus: NormalizedBus, filters: FilterCriteria) -> bool:
    """Return True if the bus satisfies every filter predicate."""
    if bus.price < filters.min_price:
        return False
    if filters.max_price is not None and bus.price > filters.max_price:
        return False
    if (
        filters.departure_bucket != DepartureBucket.ANY
        and departure_bucket(bus.departure_time) != filters.departure_bucket
    ):
        return False
    if filters.bus_type and filters.bus_type.lower() not in bus.bus_type.lower():
        return False
    if filters.operator and filters.operator.lower() not in bus.operator.lower():
        return False
    return filters.provider is None or bus.provider == filters.provider


def sort_buses(buses: Iterable[NormalizedBus], sort: SortKey) -> list[NormalizedBus]:
    """
    Sort buses by a single key.

    The sort is stable in both directions: buses with equal keys keep their
    incoming relative order.
    """
    key, reverse = SORT_KEYS[sort]
    return sorted(buses, key=key, reverse=reverse)


def apply(
    buses: Sequence[NormalizedBus],
    filters: FilterCriteria,
    sort: SortKey,
) -> tuple[NormalizedBus, ...]:
    """
    Filter and sort a sequence of buses.

    Args:
        buses: Buses to query, typically an aggregated result's ``buses``.
        filters: Filter criteria (all predicates AND-ed).
        sort: Sort key.

    Returns:
        New tuple with the matching buses in sorted order.
    """
    return tuple(sort_buses((bus for bus in buses if matches(bus, filters)), sort))


def query_results(
    result: AggregatedSearchResult,
    filters: FilterCriteria | None = None,
    sort: SortKey = SortKey.PRICE_ASC,
) -> tuple[NormalizedBus, ...]:
    """Filter and sort the buses of an aggregated result."""
    return apply(result.buses, filters or FilterCriteria(), sort)


def lowest_price(result: AggregatedSearchResult) -> Decimal | None:
    """
    Lowest fare over the whole unfiltered result.

    Independent of any filter so the best-price marker does not move while
    the user narrows the view. None when the result holds no buses.
    """
    return result.lowest_price


def is_lowest_price(bus: NormalizedBus, result: AggregatedSearchResult) -> bool:
    """Return True if the bus carries the result's lowest fare."""
    best = result.lowest_price
    return best is not None and bus.price == best


def count_by_provider(result: AggregatedSearchResult) -> dict[ProviderId, int]:
    """Number of buses per provider, including zero for failed providers."""
    counts = dict.fromkeys(result.provider_status, 0)
    for bus in result.buses:
        counts[bus.provider] = counts.get(bus.provider, 0) + 1
    return counts
