"""Factory for creating and managing site adapter instances."""

from typing import Dict, Optional, Type
import structlog

from pricehub.scrapers.base import BaseAdapter


logger = structlog.get_logger(__name__)


class AdapterFactory:
    """Registry that maps platform slugs to adapter classes."""

    def __init__(self):
        self._adapter_registry: Dict[str, Type[BaseAdapter]] = {}

    def register_adapter(self, platform: str, adapter_class: Type[BaseAdapter]) -> None:
        """Register an adapter class for a platform.

        Args:
            platform: Platform slug (e.g., "amazon")
            adapter_class: Adapter class (must inherit from BaseAdapter)
        """
        if not isinstance(adapter_class, type) or not issubclass(adapter_class, BaseAdapter):
            raise ValueError(f"Adapter class must inherit from BaseAdapter: {adapter_class}")

        self._adapter_registry[platform.lower()] = adapter_class
        logger.info("adapter_registered", platform=platform, adapter_type=adapter_class.adapter_type)

    def create_adapter(self, platform: str) -> Optional[BaseAdapter]:
        """Create an adapter instance.

        Args:
            platform: Platform slug

        Returns:
            Adapter instance, or None if the platform is not registered
        """
        adapter_class = self._adapter_registry.get(platform.lower())
        if not adapter_class:
            logger.warning("adapter_not_found", platform=platform)
            return None

        return adapter_class()

    def get_registered_platforms(self) -> list[str]:
        """Get list of registered platform slugs."""
        return list(self._adapter_registry.keys())

    def has_adapter(self, platform: str) -> bool:
        return platform.lower() in self._adapter_registry


# Global factory instance
adapter_factory = AdapterFactory()


def get_adapter_factory() -> AdapterFactory:
    """Get the global adapter factory instance.

    Returns:
        AdapterFactory instance
    """
    return adapter_factory
