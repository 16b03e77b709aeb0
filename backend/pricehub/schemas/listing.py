"""Listing and home feed Pydantic schemas for API responses."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict


class ListingResponse(BaseModel):
    """Projected listing returned by the search endpoint."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    platform: str
    name: str
    price: float
    image: Optional[str] = None
    link: Optional[str] = None


class HomeProductResponse(BaseModel):
    """Product inside a home feed section."""

    model_config = ConfigDict(from_attributes=True)

    platform: str
    name: str
    price: float
    image: Optional[str] = None
    link: Optional[str] = None


class HomeFeedSectionResponse(BaseModel):
    """One category row of the home feed."""

    model_config = ConfigDict(from_attributes=True)

    category: str
    platform: str
    products: List[HomeProductResponse]
