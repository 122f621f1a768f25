"""Search aggregation and querying package."""

from services.search.coordinator import AggregationCoordinator, validate_query
from services.search.query import (
    apply,
    count_by_provider,
    departure_bucket,
    is_lowest_price,
    lowest_price,
    query_results,
)
from services.search.types import (
    AggregatedSearchResult,
    DepartureBucket,
    FilterCriteria,
    SortKey,
)

__all__ = [
    "AggregatedSearchResult",
    "AggregationCoordinator",
    "DepartureBucket",
    "FilterCriteria",
    "SortKey",
    "apply",
    "count_by_provider",
    "departure_bucket",
    "is_lowest_price",
    "lowest_price",
    "query_results",
    "validate_query",
]
