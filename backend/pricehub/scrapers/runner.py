"""Uniform call site for site adapters.

Every adapter invocation in the service layer goes through run_adapter,
which turns exceptions into an explicit AdapterOutcome so that callers
decide how to isolate a failure instead of catching ad hoc.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import structlog

from pricehub.core.exceptions import AdapterFailure
from pricehub.scrapers.base import BaseAdapter, BaseScraperAdapter, RawListing
from pricehub.scrapers.utils.browser_manager import get_browser_manager

logger = structlog.get_logger(__name__)


@dataclass
class AdapterOutcome:
    """Result of one adapter call: listings on success, an error otherwise."""

    platform: str
    query: str
    listings: List[RawListing] = field(default_factory=list)
    error: Optional[AdapterFailure] = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def run_adapter(adapter: BaseAdapter, query: str) -> AdapterOutcome:
    """Run one adapter to completion and capture its outcome.

    Browser-driven adapters get their platform's shared browser context
    injected before the call.

    Args:
        adapter: Adapter instance
        query: Search query or category name

    Returns:
        AdapterOutcome with either listings or the failure
    """
    platform = adapter.platform
    log = logger.bind(platform=platform, query=query)

    try:
        if isinstance(adapter, BaseScraperAdapter) and adapter.browser_context is None:
            adapter.browser_context = await get_browser_manager().get_context(platform)

        listings = list(await adapter.search(query))
    except AdapterFailure as e:
        log.error("adapter_failed", error=e.message)
        return AdapterOutcome(platform=platform, query=query, error=e)
    except Exception as e:
        log.error("adapter_failed", error=str(e), exc_info=True)
        return AdapterOutcome(
            platform=platform,
            query=query,
            error=AdapterFailure(platform, f"{type(e).__name__}: {e}"),
        )
    finally:
        await adapter.cleanup()

    log.info("adapter_succeeded", count=len(listings))
    return AdapterOutcome(platform=platform, query=query, listings=listings)
