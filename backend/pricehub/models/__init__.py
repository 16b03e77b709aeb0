"""SQLAlchemy models for PriceHub.

All models are imported here so metadata.create_all can discover them.
"""

from pricehub.models.base import Base, UUIDPrimaryKeyMixin
from pricehub.models.listing import Listing

__all__ = [
    "Base",
    "UUIDPrimaryKeyMixin",
    "Listing",
]
