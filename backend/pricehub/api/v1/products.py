"""Product feed API endpoints."""

from typing import List

from fastapi import APIRouter, Depends

from pricehub.dependencies import get_home_feed_service
from pricehub.schemas import HomeFeedSectionResponse
from pricehub.services.home_feed_service import HomeFeedService

router = APIRouter()


@router.get("/home", response_model=List[HomeFeedSectionResponse])
async def home_products(
    service: HomeFeedService = Depends(get_home_feed_service),
):
    """Cheapest products per home category from a randomly chosen platform.

    Categories whose scrape fails are omitted from the response.
    """
    sections = await service.home_feed()
    return [HomeFeedSectionResponse.model_validate(s) for s in sections]
