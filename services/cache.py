"""Cache service backed by Django's cache framework."""

from __future__ import annotations

import hashlib
from typing import Any

from django.core.cache import cache

from core.logging import get_logger

logger = get_logger(__name__)


class CacheKeyPrefix:
    """Cache key prefixes for different data types."""

    SEARCH = "search"
    LAST_QUERY = "last_query"
    HEALTH = "health"


class CacheTTL:
    """Default TTL values in seconds for different data types."""

    SEARCH_RESULTS = 300  # 5 minutes
    LAST_QUERY = 60 * 60 * 24 * 30  # 30 days


class CacheService:
    """
    Service for caching data using Django's cache framework.

    Example:
        >>> cache_service = CacheService()
        >>> cache_service.set("search:abc123", result, ttl=300)
        >>> cached = cache_service.get("search:abc123")
    """

    def __init__(self, key_prefix: str = "busscanner") -> None:
        """
        Initialize the cache service.

        Args:
            key_prefix: Prefix for all cache keys.
        """
        self._key_prefix = key_prefix

    def _make_key(self, key: str) -> str:
        """Create a full cache key with prefix."""
        return f"{self._key_prefix}:{key}"

    def get(self, key: str) -> Any | None:
        """
        Get a value from the cache.

        Returns:
            The cached value or None if not found.
        """
        return cache.get(self._make_key(key))

    def set(
        self,
        key: str,
        value: Any,
        ttl: int | None = None,
    ) -> bool:
        """
        Set a value in the cache.

        Args:
            key: The cache key.
            value: The value to cache.
            ttl: Time-to-live in seconds (optional).

        Returns:
            True if successful.
        """
        cache.set(self._make_key(key), value, ttl)
        return True

    def delete(self, key: str) -> bool:
        """Delete a value from the cache."""
        cache.delete(self._make_key(key))
        return True

    def exists(self, key: str) -> bool:
        """Check if a key exists in the cache."""
        return cache.get(self._make_key(key)) is not None

    def healthcheck(self) -> bool:
        """Round-trip a value through the cache backend."""
        key = f"{CacheKeyPrefix.HEALTH}:ping"
        try:
            self.set(key, "pong", ttl=10)
            return self.get(key) == "pong"
        except Exception as e:
            logger.warning("Cache healthcheck failed", error=str(e))
            return False

    @staticmethod
    def make_search_id(query_key: str) -> str:
        """
        Derive a short search id from a query key.

        Args:
            query_key: Stable key of the search query.

        Returns:
            A 16-character hex id.
        """
        return hashlib.md5(query_key.encode(), usedforsecurity=False).hexdigest()[:16]

    @staticmethod
    def make_search_key(search_id: str) -> str:
        """Cache key for an aggregated search result."""
        return f"{CacheKeyPrefix.SEARCH}:{search_id}"

    @staticmethod
    def make_last_query_key(owner: str) -> str:
        """Cache key for the last query of a client."""
        return f"{CacheKeyPrefix.LAST_QUERY}:{owner}"


# Global cache service instance
cache_service = CacheService()
