"""Listing model: one scraped product inside a cached search scope."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, Index, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from pricehub.models.base import Base, UUIDPrimaryKeyMixin

# Column limits, enforced before rows reach the database
NAME_MAX_LENGTH = 500
URL_MAX_LENGTH = 2000
QUERY_MAX_LENGTH = 200


class Listing(UUIDPrimaryKeyMixin, Base):
    """A listing persisted as part of a (search_query, search_platforms) scope.

    All rows of a scope are written together by one search run and replaced
    wholesale by the next one. ``seq`` is the interleave ordering key and is
    only unique within its scope.
    """

    __tablename__ = "listings"

    seq: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Interleave position within the search scope"
    )
    platform: Mapped[str] = mapped_column(String(50), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    price: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
        comment="Normalized positive price, currency stripped"
    )
    image_url: Mapped[Optional[str]] = mapped_column(String(URL_MAX_LENGTH), nullable=True)
    link: Mapped[Optional[str]] = mapped_column(String(URL_MAX_LENGTH), nullable=True)

    # Cache key
    search_query: Mapped[str] = mapped_column(
        String(QUERY_MAX_LENGTH),
        nullable=False,
        comment="Lowercased search query"
    )
    search_platforms: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Canonical platform pair, e.g. 'amazon,flipkart'"
    )
    searched_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
        comment="Timestamp of the batch that produced this row"
    )

    __table_args__ = (
        UniqueConstraint("search_query", "search_platforms", "seq", name="uq_listing_scope_seq"),
        Index("idx_listings_scope", "search_query", "search_platforms", "searched_at"),
    )

    def __repr__(self) -> str:
        return f"<Listing(seq={self.seq}, platform='{self.platform}', name='{self.name[:50]}')>"
