"""TTL-gated cache over persisted search listings.

A scope (search_query, search_platforms) is fresh while at least one of
its records was searched within the TTL window. Fresh scopes are served
straight from the store; anything else is a miss and the caller scrapes
again and rewrites the scope.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional

import structlog

from pricehub.config import settings
from pricehub.core.exceptions import PersistenceError
from pricehub.services.assembler import ListingRecord
from pricehub.services.listing_store import ListingStore

logger = structlog.get_logger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CacheLookup:
    """Outcome of a freshness lookup. ``records`` is None on a miss."""

    records: Optional[List[ListingRecord]] = None

    @property
    def fresh(self) -> bool:
        return self.records is not None


class FreshnessCache:
    """Decides per cache key whether persisted listings can be reused."""

    def __init__(
        self,
        store: ListingStore,
        ttl: Optional[timedelta] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.store = store
        self.ttl = ttl if ttl is not None else timedelta(minutes=settings.SEARCH_CACHE_TTL_MINUTES)
        self.clock = clock
        self.logger = logger.bind(service="freshness_cache")

    async def lookup(self, search_query: str, search_platforms: str) -> CacheLookup:
        """Serve a scope if it is still fresh.

        A store read failure is treated as a miss so the caller can still
        answer by scraping.

        Returns:
            CacheLookup with records ordered by id on a hit, empty on a miss
        """
        cutoff = self.clock() - self.ttl
        try:
            if not await self.store.has_records_since(search_query, search_platforms, cutoff):
                self.logger.info("cache_miss", query=search_query, platforms=search_platforms)
                return CacheLookup()
            records = await self.store.fetch_scope(search_query, search_platforms)
        except PersistenceError as e:
            self.logger.warning(
                "cache_read_failed_forcing_miss",
                query=search_query,
                platforms=search_platforms,
                error=e.message,
            )
            return CacheLookup()

        # The scope can be cleared between the two reads by a concurrent rewrite
        if not records:
            self.logger.info("cache_miss", query=search_query, platforms=search_platforms)
            return CacheLookup()

        self.logger.info(
            "cache_hit",
            query=search_query,
            platforms=search_platforms,
            count=len(records),
        )
        return CacheLookup(records=records)

    async def store_records(
        self,
        search_query: str,
        search_platforms: str,
        records: List[ListingRecord],
    ) -> List[ListingRecord]:
        """Replace the scope with ``records`` (rewrite, never merge).

        Raises:
            PersistenceError: If the store is unavailable
        """
        return await self.store.replace_scope(search_query, search_platforms, records)
