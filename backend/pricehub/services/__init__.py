"""Service layer: persistence, caching and search orchestration."""

from pricehub.services.assembler import ListingRecord, assemble_records, interleave
from pricehub.services.freshness_cache import CacheLookup, FreshnessCache
from pricehub.services.history_service import HistoryService
from pricehub.services.home_feed_service import HomeFeedSection, HomeFeedService
from pricehub.services.listing_store import ListingStore
from pricehub.services.search_service import SearchService

__all__ = [
    "ListingRecord",
    "assemble_records",
    "interleave",
    "CacheLookup",
    "FreshnessCache",
    "HistoryService",
    "HomeFeedSection",
    "HomeFeedService",
    "ListingStore",
    "SearchService",
]
