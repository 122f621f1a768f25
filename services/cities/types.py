"""Types for city suggestions."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CitySuggestion:
    """
    A candidate city for a partial name.

    Attributes:
        id: Identifier assigned by the suggestion service.
        display_name: City name to show and to search with.
        region: State or region, when known.
    """

    id: str
    display_name: str
    region: str | None = None
