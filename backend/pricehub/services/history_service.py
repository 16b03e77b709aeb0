"""Recently searched queries, derived from cached listings."""

from typing import List, Optional

import structlog

from pricehub.config import settings
from pricehub.services.listing_store import ListingStore

logger = structlog.get_logger(__name__)


class HistoryService:
    """Read-only view of the most recent distinct search queries."""

    def __init__(self, store: ListingStore):
        self.store = store
        self.logger = logger.bind(service="history_service")

    async def recent_queries(self, limit: Optional[int] = None) -> List[str]:
        """Return up to ``limit`` queries, most recently searched first.

        Raises:
            PersistenceError: If the store cannot be read
        """
        limit = limit or settings.RECENT_QUERIES_LIMIT
        queries = await self.store.recent_queries(limit=limit)
        self.logger.debug("recent_queries_fetched", count=len(queries))
        return queries
