"""URL configuration for the API application."""

from django.urls import path

from apps.api.views import (
    CitySuggestionsView,
    HealthCheckView,
    LastSearchView,
    ProvidersView,
    SearchResultsView,
    SearchView,
)

app_name = "api"

urlpatterns = [
    path("search/", SearchView.as_view(), name="search"),
    path("search/last/", LastSearchView.as_view(), name="search-last"),
    path("search/<str:search_id>/results/", SearchResultsView.as_view(), name="search-results"),
    path("cities/", CitySuggestionsView.as_view(), name="cities"),
    path("providers/", ProvidersView.as_view(), name="providers"),
    path("health/", HealthCheckView.as_view(), name="health"),
]
