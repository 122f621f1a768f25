"""City name suggestion package."""

from services.cities.service import CitySuggestionClient
from services.cities.types import CitySuggestion

__all__ = ["CitySuggestion", "CitySuggestionClient"]
