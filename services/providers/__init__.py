"""Bus search provider adapters package."""

from services.providers.base import (
    BusProvider,
    NormalizedBus,
    ProviderBuses,
    ProviderId,
    SearchQuery,
)
from services.providers.errors import (
    ErrorCode,
    NetworkError,
    ParseError,
    ProviderError,
    QueryValidationError,
    TimeoutFailure,
)
from services.providers.registry import ProviderRegistry, build_default_registry

__all__ = [
    "BusProvider",
    "ErrorCode",
    "NetworkError",
    "NormalizedBus",
    "ParseError",
    "ProviderBuses",
    "ProviderError",
    "ProviderId",
    "ProviderRegistry",
    "QueryValidationError",
    "SearchQuery",
    "TimeoutFailure",
    "build_default_registry",
]
