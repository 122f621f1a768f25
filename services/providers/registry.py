"""Registry of provider adapters."""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.logging import get_logger
from core.result import Failure, Success
from services.providers.base import ProviderId
from services.providers.platforms import PLATFORM_ADAPTERS

if TYPE_CHECKING:
    from core.config import ProviderSettings
    from core.result import Result
    from services.providers.base import BusProvider

logger = get_logger(__name__)


class ProviderNotFoundError(Exception):
    """Raised when no adapter is registered for a provider."""

    def __init__(self, provider: ProviderId | str) -> None:
        """Initialize with the provider."""
        self.provider = provider
        value = provider.value if isinstance(provider, ProviderId) else provider
        super().__init__(f"No adapter registered for provider: {value}")


class ProviderRegistry:
    """
    Ordered registry of provider adapters.

    Registration order is the declaration order used when merging results.
    Re-registering a provider replaces its adapter and keeps its position.

    Example:
        >>> registry = ProviderRegistry()
        >>> registry.register(AbhiBusAdapter())
        >>> registry.provider_ids
        [<ProviderId.ABHIBUS: 'abhibus'>]
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._providers: dict[ProviderId, BusProvider] = {}

    def register(self, adapter: BusProvider) -> None:
        """Register an adapter under its provider id."""
        self._providers[adapter.provider_id] = adapter

    def unregister(self, provider: ProviderId) -> bool:
        """
        Unregister an adapter.

        Returns:
            True if an adapter was unregistered, False if not found.
        """
        return self._providers.pop(provider, None) is not None

    def get_provider(self, provider: ProviderId) -> Result[BusProvider, ProviderNotFoundError]:
        """Get the adapter registered for a provider."""
        adapter = self._providers.get(provider)
        if adapter is None:
            return Failure(ProviderNotFoundError(provider))
        return Success(adapter)

    def is_registered(self, provider: ProviderId) -> bool:
        """Check if a provider is registered."""
        return provider in self._providers

    @property
    def providers(self) -> list[BusProvider]:
        """Registered adapters in declaration order."""
        return list(self._providers.values())

    @property
    def provider_ids(self) -> list[ProviderId]:
        """Registered provider ids in declaration order."""
        return list(self._providers.keys())

    @property
    def provider_count(self) -> int:
        """Return the number of registered adapters."""
        return len(self._providers)

    async def close(self) -> None:
        """Close every registered adapter."""
        for provider_id, adapter in self._providers.items():
            try:
                await adapter.close()
            except Exception as e:
                logger.error("Error closing provider", provider=provider_id.value, error=str(e))

    def clear(self) -> None:
        """Remove all registered adapters."""
        self._providers.clear()


def build_default_registry(settings: ProviderSettings) -> ProviderRegistry:
    """
    Build a registry with the platforms enabled in settings.

    Unknown provider names are logged and skipped.

    Args:
        settings: Provider settings.

    Returns:
        Registry in the configured order.
    """
    registry = ProviderRegistry()
    for name in settings.enabled:
        try:
            provider = ProviderId(name)
        except ValueError:
            logger.warning("Unknown provider in settings", provider=name)
            continue
        adapter_cls = PLATFORM_ADAPTERS[provider]
        registry.register(
            adapter_cls(base_url=settings.base_url, timeout=settings.request_timeout)
        )
    return registry
