"""Search orchestration: freshness cache in front of two sequential scrapes.

A search for (query, platforms) is served from the freshness cache when a
recent result set exists. Otherwise each platform's adapter runs in turn,
its listings are assembled into interleaved records, the combined set
replaces the cached scope, and the records are returned ordered by id.
"""

from datetime import datetime
from typing import Callable, List, Optional

import structlog

from pricehub.config import settings
from pricehub.core.exceptions import (
    CriticalOrchestrationError,
    InvalidRequestError,
    PriceHubException,
)
from pricehub.models.listing import QUERY_MAX_LENGTH
from pricehub.scrapers.factory import AdapterFactory
from pricehub.scrapers.runner import run_adapter
from pricehub.services.assembler import (
    ListingRecord,
    assemble_records,
    interleave,
    parse_platforms,
    platforms_key,
)
from pricehub.services.freshness_cache import FreshnessCache, utcnow
from pricehub.services.listing_store import ListingStore

logger = structlog.get_logger(__name__)


class SearchService:
    """Orchestrates cached multi-platform product searches.

    Adapter calls are strictly sequential: the second platform is only
    scraped after the first one has finished. This keeps a single browser
    workload in flight per request.
    """

    def __init__(
        self,
        store: ListingStore,
        adapter_factory: AdapterFactory,
        cache: Optional[FreshnessCache] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        """Initialize search service.

        Args:
            store: Listing store handle
            adapter_factory: Registry used to resolve platform adapters
            cache: Freshness cache over ``store`` (built from it if omitted)
            clock: Source of batch timestamps
        """
        self.store = store
        self.adapter_factory = adapter_factory
        self.cache = cache or FreshnessCache(store, clock=clock)
        self.clock = clock
        self.logger = logger.bind(service="search_service")

    async def search(self, query: Optional[str], platforms_csv: Optional[str]) -> List[ListingRecord]:
        """Search listings for a query across up to two platforms.

        Args:
            query: User search term
            platforms_csv: Comma-separated platform slugs, e.g. "amazon,flipkart"

        Returns:
            Records ordered by interleave id

        Raises:
            InvalidRequestError: If the query or platforms are missing, or the query is too long
            PersistenceError: If the rewritten result set cannot be stored
            CriticalOrchestrationError: On any unexpected failure
        """
        raw_query = (query or "").strip()
        if not raw_query:
            raise InvalidRequestError("Missing required parameter: q (query)")
        if len(raw_query) > QUERY_MAX_LENGTH:
            raise InvalidRequestError(
                f"Query too long: at most {QUERY_MAX_LENGTH} characters are allowed"
            )

        platforms = parse_platforms(platforms_csv, limit=settings.MAX_SEARCH_PLATFORMS)
        if not platforms:
            raise InvalidRequestError("Missing required parameter: platforms")

        try:
            return await self._search(raw_query, platforms)
        except PriceHubException:
            raise
        except Exception as e:
            self.logger.error("search_failed", query=raw_query, error=str(e), exc_info=True)
            raise CriticalOrchestrationError(
                "A critical error occurred during scraping and saving data."
            ) from e

    async def _search(self, raw_query: str, platforms: List[str]) -> List[ListingRecord]:
        search_query = raw_query.lower()

        # Unsupported platforms contribute nothing and stay out of the cache key
        supported = [p for p in platforms if self.adapter_factory.has_adapter(p)]
        if len(supported) < len(platforms):
            self.logger.warning(
                "unsupported_platforms_ignored",
                requested=platforms,
                supported=supported,
            )
        if not supported:
            return []

        platforms = supported
        search_platforms = platforms_key(platforms)

        lookup = await self.cache.lookup(search_query, search_platforms)
        if lookup.fresh:
            return lookup.records

        self.logger.info(
            "search_started",
            query=search_query,
            platforms=platforms,
            reason="cache_miss",
        )

        searched_at = self.clock()
        step = len(platforms)
        records: List[ListingRecord] = []

        for index, platform in enumerate(platforms):
            adapter = self.adapter_factory.create_adapter(platform)
            outcome = await run_adapter(adapter, raw_query)
            if not outcome.ok:
                self.logger.warning(
                    "platform_contributed_nothing",
                    platform=platform,
                    error=outcome.error.message,
                )
                continue

            records.extend(
                assemble_records(
                    outcome.listings,
                    platform=platform,
                    query=search_query,
                    search_platforms=search_platforms,
                    start_id=index + 1,
                    step=step,
                    searched_at=searched_at,
                )
            )

        stored = await self.cache.store_records(search_query, search_platforms, records)
        results = interleave(stored)

        self.logger.info(
            "search_completed",
            query=search_query,
            platforms=search_platforms,
            results=len(results),
        )
        return results
