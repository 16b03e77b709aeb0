"""Register all marketplace adapters with the factory."""

import structlog

from pricehub.scrapers.factory import AdapterFactory, get_adapter_factory
from pricehub.scrapers.adapters import (
    AmazonAdapter,
    FlipkartAdapter,
    MeeshoAdapter,
    MyntraAdapter,
)

logger = structlog.get_logger(__name__)


def register_all_adapters(factory: AdapterFactory = None) -> AdapterFactory:
    """Register all available adapters with the factory.

    This should be called during application startup.
    """
    factory = factory or get_adapter_factory()

    for adapter_class in (AmazonAdapter, FlipkartAdapter, MeeshoAdapter, MyntraAdapter):
        try:
            factory.register_adapter(adapter_class.platform, adapter_class)
        except ValueError as e:
            logger.error(
                "adapter_registration_failed",
                platform=adapter_class.platform,
                error=str(e),
            )

    logger.info(
        "all_adapters_registered",
        count=len(factory.get_registered_platforms()),
        platforms=factory.get_registered_platforms(),
    )
    return factory
