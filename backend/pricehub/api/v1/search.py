"""Search API endpoint."""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from pricehub.dependencies import get_search_service
from pricehub.schemas import ListingResponse
from pricehub.services.search_service import SearchService

router = APIRouter()


@router.get("", response_model=List[ListingResponse])
async def search(
    q: Optional[str] = Query(None, description="Search query"),
    platforms: Optional[str] = Query(
        None, description="Comma-separated platform pair, e.g. amazon,flipkart"
    ),
    service: SearchService = Depends(get_search_service),
):
    """Search listings across two platforms.

    Results are served from the freshness cache when the same query and
    platform pair was scraped within the last few minutes; otherwise both
    platforms are scraped one after the other. Listings alternate between
    the two platforms.
    """
    records = await service.search(q, platforms)
    return [ListingResponse.model_validate(r.to_public()) for r in records]
