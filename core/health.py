"""Health check endpoint for monitoring."""

from django.http import JsonResponse

from services.cache import cache_service


def health_check(_request: object) -> JsonResponse:
    """
    Health check endpoint.

    The service keeps no database; the cache holds every search result, so
    it is the one dependency checked here.

    Args:
        _request: Django HTTP request object (unused but required by Django).

    Returns:
        JsonResponse with health status.
    """
    checks: dict[str, dict[str, str]] = {
        "cache": _check_cache(),
    }

    all_healthy = all(check.get("status") == "healthy" for check in checks.values())

    health_status = {
        "status": "healthy" if all_healthy else "degraded",
        "checks": checks,
    }

    return JsonResponse(
        health_status,
        status=200 if all_healthy else 503,
    )


def _check_cache() -> dict[str, str]:
    """Check cache connectivity."""
    if cache_service.healthcheck():
        return {"status": "healthy"}
    return {"status": "unhealthy", "error": "cache round-trip failed"}
