"""FastAPI dependency injection providers.

This module is the composition root: the listing store handle is built
here from the application's session factory and handed to every service
that needs it. Tests override get_listing_store and get_factory.
"""

from fastapi import Depends

from pricehub.db.session import async_session_factory
from pricehub.scrapers.factory import AdapterFactory, get_adapter_factory
from pricehub.services.history_service import HistoryService
from pricehub.services.home_feed_service import HomeFeedService
from pricehub.services.listing_store import ListingStore
from pricehub.services.search_service import SearchService


def get_listing_store() -> ListingStore:
    """Listing store bound to the application database."""
    return ListingStore(async_session_factory)


def get_factory() -> AdapterFactory:
    return get_adapter_factory()


def get_search_service(
    store: ListingStore = Depends(get_listing_store),
    factory: AdapterFactory = Depends(get_factory),
) -> SearchService:
    return SearchService(store, factory)


def get_home_feed_service(
    factory: AdapterFactory = Depends(get_factory),
) -> HomeFeedService:
    return HomeFeedService(factory)


def get_history_service(
    store: ListingStore = Depends(get_listing_store),
) -> HistoryService:
    return HistoryService(store)
