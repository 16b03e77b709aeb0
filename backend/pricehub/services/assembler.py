"""Record assembly and interleave sequencing.

Raw adapter output is validated here and turned into ListingRecord objects
that carry their cache scope and an interleave id. Two platforms assembled
with (start_id=1, step=2) and (start_id=2, step=2) alternate 1-2-1-2 once
sorted by id, no matter which adapter finished first or returned more.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable, List, Optional

import structlog

from pricehub.models.listing import NAME_MAX_LENGTH, URL_MAX_LENGTH
from pricehub.scrapers.base import RawListing
from pricehub.scrapers.utils.normalizer import PriceNormalizer

logger = structlog.get_logger(__name__)


@dataclass
class ListingRecord:
    """A validated listing inside a (search_query, search_platforms) scope."""

    id: int
    platform: str
    name: str
    price: Decimal
    search_query: str
    search_platforms: str
    searched_at: datetime
    image: Optional[str] = None
    link: Optional[str] = None

    def to_public(self) -> dict:
        """Project to the shape returned by the search endpoint."""
        return {
            "id": self.id,
            "platform": self.platform,
            "name": self.name,
            "price": self.price,
            "image": self.image,
            "link": self.link,
        }


def parse_platforms(platforms_csv: Optional[str], limit: int = 2) -> List[str]:
    """Split a comma-separated platform list into lowercase slugs.

    Blank and repeated entries are dropped (first occurrence wins) and the
    list is truncated to ``limit``, so "amazon,amazon" is a single platform.
    """
    if not platforms_csv:
        return []
    platforms = []
    for slug in platforms_csv.split(","):
        slug = slug.strip().lower()
        if slug and slug not in platforms:
            platforms.append(slug)
    return platforms[:limit]


def platforms_key(platforms: Iterable[str]) -> str:
    """Canonical cache key for an unordered set of platforms.

    >>> platforms_key(["flipkart", "amazon"])
    'amazon,flipkart'
    """
    return ",".join(sorted(p.strip().lower() for p in platforms))


def _bounded_url(url: Optional[str]) -> Optional[str]:
    """The URL if it fits the column, else None. URLs are never cut."""
    if not url or len(url) > URL_MAX_LENGTH:
        return None
    return url


def assemble_records(
    raw_listings: Iterable[RawListing],
    platform: str,
    query: str,
    search_platforms: str,
    start_id: int,
    step: int,
    searched_at: Optional[datetime] = None,
) -> List[ListingRecord]:
    """Validate raw listings and assign interleave ids.

    The listing at input position ``i`` gets ``id = start_id + i * step``.
    Positions are counted before filtering, so a dropped listing leaves a
    gap in the id space instead of shifting its neighbours.

    Args:
        raw_listings: Listings as returned by one adapter
        platform: Platform slug attached to every record
        query: Search query (stored lowercased)
        search_platforms: Canonical platform pair key
        start_id: This platform's offset in the interleave (1-based)
        step: Number of platforms being interleaved
        searched_at: Batch timestamp shared by every record

    Returns:
        Records with a non-empty name and a positive price
    """
    if start_id < 1 or step < 1:
        raise ValueError(f"start_id and step must be positive (got {start_id}, {step})")

    searched_at = searched_at or datetime.now(timezone.utc)
    search_query = query.strip().lower()

    records = []
    dropped = 0
    for index, raw in enumerate(raw_listings):
        name = (raw.name or "").strip()[:NAME_MAX_LENGTH].strip()
        price = PriceNormalizer.normalize(raw.price)
        if not name or price <= 0:
            dropped += 1
            continue

        records.append(
            ListingRecord(
                id=start_id + index * step,
                platform=platform,
                name=name,
                price=price,
                image=_bounded_url(raw.image),
                link=_bounded_url(raw.link),
                search_query=search_query,
                search_platforms=search_platforms,
                searched_at=searched_at,
            )
        )

    if dropped:
        logger.info(
            "invalid_listings_dropped",
            platform=platform,
            query=search_query,
            dropped=dropped,
            kept=len(records),
        )

    return records


def interleave(records: Iterable[ListingRecord]) -> List[ListingRecord]:
    """Order records by interleave id."""
    return sorted(records, key=lambda r: r.id)
