"""
Normalization of raw provider records into NormalizedBus.

Providers expose the same semantic fields under slightly different keys
depending on platform and API version. Every alternate key is resolved here,
in a fixed precedence order, so nothing downstream needs to know about it.
"""

from __future__ import annotations

import re
from dataclasses import replace
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any

from core.logging import get_logger
from services.providers.base import NormalizedBus
from services.providers.errors import RecordParseError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from services.providers.base import ProviderId, RawBusRecord

logger = get_logger(__name__)

# Field precedence: first present and parsable value wins
PRICE_FIELDS: tuple[str, ...] = ("Price", "price")
BUS_TYPE_FIELDS: tuple[str, ...] = ("busTypeName", "BusType")

DURATION_PATTERN = re.compile(r"^(\d+)h\s*(\d+)m$")
TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})(?::\d{2})?$")

# Bus type substring -> amenity tag
AMENITY_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("sleeper", "Sleeper"),
    ("seater", "Seater"),
    ("luxury", "Premium"),
    ("deluxe", "Premium"),
)

MAX_RATING = 5.0


def parse_duration(text: str | None) -> int:
    """
    Parse a duration such as ``"7h 45m"`` into minutes.

    Anything that does not match ``<hours>h <minutes>m`` yields 0, including
    hour-only values like ``"8h"``.
    """
    if not text:
        return 0
    match = DURATION_PATTERN.match(str(text).strip())
    if match is None:
        return 0
    hours, minutes = match.groups()
    return int(hours) * 60 + int(minutes)


def derive_amenities(bus_type: str) -> frozenset[str]:
    """Derive amenity tags from substrings of the bus type label."""
    label = bus_type.lower()
    return frozenset(tag for keyword, tag in AMENITY_KEYWORDS if keyword in label)


def _parse_decimal(value: Any) -> Decimal | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        parsed = Decimal(str(value).replace(",", "").strip())
    except InvalidOperation:
        return None
    return parsed if parsed.is_finite() else None


def resolve_price(record: RawBusRecord) -> Decimal:
    """
    Resolve the fare using PRICE_FIELDS precedence.

    Returns 0 when no field holds a parsable number. Negative values clamp
    to 0.
    """
    for field in PRICE_FIELDS:
        price = _parse_decimal(record.get(field))
        if price is not None:
            return max(price, Decimal("0"))
    return Decimal("0")


def resolve_bus_type(record: RawBusRecord) -> str:
    """Resolve the bus type label using BUS_TYPE_FIELDS precedence."""
    for field in BUS_TYPE_FIELDS:
        value = record.get(field)
        if value:
            return str(value).strip()
    return ""


def normalize_time(value: Any) -> str:
    """
    Normalize a clock time to zero-padded ``HH:MM``.

    Raises:
        RecordParseError: If the value is not a valid time of day.
    """
    match = TIME_PATTERN.match(str(value or "").strip())
    if match is None:
        raise RecordParseError(f"Invalid time: {value!r}")
    hour, minute = (int(part) for part in match.groups())
    if hour > 23 or minute > 59:
        raise RecordParseError(f"Invalid time: {value!r}")
    return f"{hour:02d}:{minute:02d}"


def parse_seats(value: Any) -> int:
    """
    Parse the available seat count.

    Raises:
        RecordParseError: If the value is not an integer.
    """
    if isinstance(value, bool):
        raise RecordParseError(f"Invalid seat count: {value!r}")
    try:
        seats = int(str(value).strip())
    except (TypeError, ValueError) as e:
        raise RecordParseError(f"Invalid seat count: {value!r}") from e
    return max(seats, 0)


def parse_rating(value: Any) -> float:
    """Parse an optional rating, clamped to [0, 5]."""
    rating = _parse_decimal(value)
    if rating is None:
        return 0.0
    return min(max(float(rating), 0.0), MAX_RATING)


def make_bus_id(provider: ProviderId, operator: str, departure_time: str) -> str:
    """Build an id from operator and departure time."""
    slug = re.sub(r"[^a-z0-9]+", "-", operator.lower()).strip("-")
    return f"{provider.value}-{slug}-{departure_time.replace(':', '')}"


def normalize_record(record: RawBusRecord, provider: ProviderId) -> NormalizedBus:
    """
    Map one raw provider record to a NormalizedBus.

    Args:
        record: Raw bus record as returned by the provider.
        provider: Provider that returned the record.

    Returns:
        The normalized bus.

    Raises:
        RecordParseError: If a required field is missing or malformed.
    """
    if not isinstance(record, dict):
        raise RecordParseError(f"Expected an object, got {type(record).__name__}")

    operator = str(record.get("TravelsName") or "").strip()
    if not operator:
        raise RecordParseError("Missing operator name")

    departure_time = normalize_time(record.get("StartTime"))
    arrival_raw = record.get("ArriveTime")
    arrival_time = normalize_time(arrival_raw) if arrival_raw else ""
    duration_label = str(record.get("TravelTime") or "").strip()
    bus_type = resolve_bus_type(record)

    return NormalizedBus(
        id=make_bus_id(provider, operator, departure_time),
        operator=operator,
        departure_time=departure_time,
        arrival_time=arrival_time,
        duration_minutes=parse_duration(duration_label),
        duration_label=duration_label,
        bus_type=bus_type,
        amenities=derive_amenities(bus_type),
        available_seats=parse_seats(record.get("AvailableSeats")),
        price=resolve_price(record),
        rating=parse_rating(record.get("rating")),
        provider=provider,
    )


def normalize_records(
    records: Iterable[RawBusRecord],
    provider: ProviderId,
) -> tuple[NormalizedBus, ...]:
    """
    Normalize a provider's raw records, dropping the malformed ones.

    Ids stay unique within the returned tuple: a repeated operator and
    departure time gets a numeric suffix.
    """
    buses: list[NormalizedBus] = []
    seen: dict[str, int] = {}

    for index, record in enumerate(records):
        try:
            bus = normalize_record(record, provider)
        except RecordParseError as e:
            logger.warning(
                "Skipping unparseable bus record",
                provider=provider.value,
                index=index,
                error=str(e),
            )
            continue

        occurrences = seen.get(bus.id, 0) + 1
        seen[bus.id] = occurrences
        if occurrences > 1:
            bus = replace(bus, id=f"{bus.id}-{occurrences}")
        buses.append(bus)

    return tuple(buses)
