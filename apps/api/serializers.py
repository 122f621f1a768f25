"""API serializers for bus search."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any

from rest_framework import serializers

from core.result import Success
from services.providers.base import PROVIDER_NAMES, ProviderId
from services.search.types import DepartureBucket, FilterCriteria, SortKey

if TYPE_CHECKING:
    from services.providers.base import NormalizedBus, ProviderOutcome


class SearchInputSerializer(serializers.Serializer):
    """Serializer for search input.

    Note: DRF CharField has trim_whitespace=True by default, so
    whitespace-only cities become empty and fail validation here, before
    the search is started.
    """

    source = serializers.CharField(max_length=100, help_text="Origin city name")
    destination = serializers.CharField(max_length=100, help_text="Destination city name")
    date = serializers.DateField(help_text="Travel date (YYYY-MM-DD)")


class ResultQuerySerializer(serializers.Serializer):
    """Serializer for filter and sort query parameters of a result view."""

    min_price = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal("0"),
        required=False,
        default=Decimal("0"),
    )
    max_price = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal("0"),
        required=False,
        allow_null=True,
        default=None,
    )
    departure = serializers.ChoiceField(
        choices=[bucket.value for bucket in DepartureBucket],
        required=False,
        default=DepartureBucket.ANY.value,
    )
    bus_type = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")
    operator = serializers.CharField(max_length=100, required=False, allow_blank=True, default="")
    provider = serializers.ChoiceField(
        choices=[provider.value for provider in ProviderId],
        required=False,
        allow_blank=True,
        default="",
    )
    sort = serializers.ChoiceField(
        choices=[key.value for key in SortKey],
        required=False,
        default=SortKey.PRICE_ASC.value,
    )

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        """Check the price range."""
        max_price = attrs.get("max_price")
        if max_price is not None and attrs["min_price"] > max_price:
            raise serializers.ValidationError(
                {"min_price": "min_price cannot be greater than max_price"}
            )
        return attrs

    def to_filters(self) -> FilterCriteria:
        """Build FilterCriteria from validated data."""
        data = self.validated_data
        return FilterCriteria(
            min_price=data["min_price"],
            max_price=data["max_price"],
            departure_bucket=DepartureBucket(data["departure"]),
            bus_type=data["bus_type"] or None,
            operator=data["operator"] or None,
            provider=ProviderId(data["provider"]) if data["provider"] else None,
        )

    def to_sort(self) -> SortKey:
        """Build the SortKey from validated data."""
        return SortKey(self.validated_data["sort"])


def format_price(value: Decimal) -> str:
    """Render a fare with two decimal places, whatever its magnitude."""
    return f"{value:.2f}"


class PriceField(serializers.Field):
    """Read-only fare field.

    Unlike DecimalField it places no cap on the number of digits, so any
    non-negative fare a provider reports can be rendered.
    """

    def __init__(self, **kwargs: Any) -> None:
        kwargs["read_only"] = True
        super().__init__(**kwargs)

    def to_representation(self, value: Decimal) -> str:
        return format_price(value)


class BusSerializer(serializers.Serializer):
    """Serializer for a normalized bus.

    Pass ``lowest_price`` in the context to flag the best offer.
    """

    id = serializers.CharField()
    operator = serializers.CharField()
    departure_time = serializers.CharField()
    arrival_time = serializers.CharField()
    duration_minutes = serializers.IntegerField()
    duration = serializers.CharField(source="duration_label")
    bus_type = serializers.CharField()
    amenities = serializers.SerializerMethodField()
    available_seats = serializers.IntegerField()
    price = PriceField()
    rating = serializers.FloatField()
    provider = serializers.CharField(source="provider.value")
    provider_name = serializers.SerializerMethodField()
    is_lowest_price = serializers.SerializerMethodField()

    def get_amenities(self, bus: NormalizedBus) -> list[str]:
        """Return amenities in a stable order."""
        return sorted(bus.amenities)

    def get_provider_name(self, bus: NormalizedBus) -> str:
        """Return the provider display name."""
        return PROVIDER_NAMES.get(bus.provider, bus.provider.value)

    def get_is_lowest_price(self, bus: NormalizedBus) -> bool:
        """Return True if the bus carries the overall lowest fare."""
        lowest = self.context.get("lowest_price")
        return lowest is not None and bus.price == lowest


def serialize_provider_status(
    provider_status: dict[ProviderId, ProviderOutcome],
    counts: dict[ProviderId, int],
) -> list[dict[str, Any]]:
    """Build the per-provider status payload."""
    entries = []
    for provider, outcome in provider_status.items():
        entry: dict[str, Any] = {
            "provider": provider.value,
            "name": PROVIDER_NAMES.get(provider, provider.value),
            "status": "success" if isinstance(outcome, Success) else "failure",
            "count": counts.get(provider, 0),
            "total_count": None,
            "error": None,
        }
        if isinstance(outcome, Success):
            entry["total_count"] = outcome.value.total_count
        else:
            entry["error"] = {
                "code": outcome.error.code.value,
                "message": outcome.error.message,
            }
        entries.append(entry)
    return entries


class SearchQuerySerializer(serializers.Serializer):
    """Serializer for a search query."""

    source = serializers.CharField()
    destination = serializers.CharField()
    date = serializers.DateField()


class CitySuggestionSerializer(serializers.Serializer):
    """Serializer for a city suggestion."""

    id = serializers.CharField()
    display_name = serializers.CharField()
    region = serializers.CharField(allow_null=True)


class ProviderSerializer(serializers.Serializer):
    """Serializer for provider information."""

    code = serializers.CharField()
    name = serializers.CharField()
    is_enabled = serializers.BooleanField()


class HealthCheckSerializer(serializers.Serializer):
    """Serializer for health check response."""

    status = serializers.CharField()
    version = serializers.CharField()
    services = serializers.DictField(child=serializers.BooleanField())
