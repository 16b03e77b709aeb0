"""Pydantic schemas for the PriceHub API."""

from pricehub.schemas.common import ErrorDetail, ErrorResponse
from pricehub.schemas.health import HealthCheckResponse
from pricehub.schemas.listing import HomeFeedSectionResponse, HomeProductResponse, ListingResponse

__all__ = [
    # Common
    "ErrorDetail",
    "ErrorResponse",
    # Listings
    "ListingResponse",
    "HomeProductResponse",
    "HomeFeedSectionResponse",
    # Health
    "HealthCheckResponse",
]
