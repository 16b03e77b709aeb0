"""Health check endpoint."""

from fastapi import APIRouter, Depends

from pricehub.dependencies import get_factory, get_listing_store
from pricehub.scrapers.factory import AdapterFactory
from pricehub.schemas import HealthCheckResponse
from pricehub.services.listing_store import ListingStore

router = APIRouter()


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(
    store: ListingStore = Depends(get_listing_store),
    factory: AdapterFactory = Depends(get_factory),
):
    """Return service health status.

    Reports database connectivity and the platforms with a registered
    adapter.
    """
    db_ok = await store.ping()
    platforms = factory.get_registered_platforms()

    return HealthCheckResponse(
        status="ok" if db_ok and platforms else "degraded",
        database="ok" if db_ok else "error",
        platforms=platforms,
    )
