"""Home feed composition: cheapest products per category from one platform."""

import random
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

import structlog

from pricehub.config import settings
from pricehub.core.exceptions import AdapterNotFoundError
from pricehub.scrapers.base import RawListing
from pricehub.scrapers.factory import AdapterFactory
from pricehub.scrapers.runner import run_adapter
from pricehub.scrapers.utils.normalizer import PriceNormalizer

logger = structlog.get_logger(__name__)


@dataclass
class HomeProduct:
    platform: str
    name: str
    price: Decimal
    image: Optional[str] = None
    link: Optional[str] = None


@dataclass
class HomeFeedSection:
    """One category row of the home feed. Never persisted."""

    category: str
    platform: str
    products: List[HomeProduct] = field(default_factory=list)


def cheapest_products(
    listings: Iterable[RawListing], platform: str, limit: int
) -> List[HomeProduct]:
    """Normalize prices, drop unusable listings, keep the ``limit`` cheapest."""
    products = []
    for raw in listings:
        name = (raw.name or "").strip()
        price = PriceNormalizer.normalize(raw.price)
        if not name or price <= 0:
            continue
        products.append(
            HomeProduct(
                platform=platform,
                name=name,
                price=price,
                image=raw.image or None,
                link=raw.link or None,
            )
        )

    products.sort(key=lambda p: p.price)
    return products[:limit]


class HomeFeedService:
    """Builds the home feed by rescraping a fixed category list.

    One platform is picked at random per request and every category is
    scraped on it sequentially. A failing category is logged and left
    out; it never aborts the rest of the feed.
    """

    def __init__(
        self,
        adapter_factory: AdapterFactory,
        platforms: Optional[Sequence[str]] = None,
        categories: Optional[Sequence[str]] = None,
        top_n: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        self.adapter_factory = adapter_factory
        self.platforms = list(platforms or settings.HOME_FEED_PLATFORMS)
        self.categories = list(categories or settings.HOME_FEED_CATEGORIES)
        self.top_n = top_n if top_n is not None else settings.HOME_FEED_TOP_N
        self.rng = rng or random.Random()
        self.logger = logger.bind(service="home_feed_service")

    def choose_platform(self) -> str:
        return self.rng.choice(self.platforms)

    async def home_feed(self) -> List[HomeFeedSection]:
        """Compose the home feed.

        Returns:
            One section per category that scraped successfully, in
            category order

        Raises:
            AdapterNotFoundError: If the chosen platform has no adapter
        """
        platform = self.choose_platform()
        if not self.adapter_factory.has_adapter(platform):
            self.logger.error("home_feed_adapter_missing", platform=platform)
            raise AdapterNotFoundError(platform)

        self.logger.info("home_feed_started", platform=platform, categories=self.categories)

        sections: List[HomeFeedSection] = []
        for category in self.categories:
            adapter = self.adapter_factory.create_adapter(platform)
            outcome = await run_adapter(adapter, category)
            if not outcome.ok:
                self.logger.warning(
                    "home_feed_category_skipped",
                    platform=platform,
                    category=category,
                    error=outcome.error.message,
                )
                continue

            products = cheapest_products(outcome.listings, platform, self.top_n)
            self.logger.info(
                "home_feed_category_fetched",
                platform=platform,
                category=category,
                fetched=len(outcome.listings),
                kept=len(products),
            )
            sections.append(HomeFeedSection(category=category, platform=platform, products=products))

        return sections
