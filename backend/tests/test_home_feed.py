"""Tests for home feed composition and search history."""

import random
from decimal import Decimal

import pytest

from pricehub.core.exceptions import AdapterNotFoundError
from pricehub.scrapers.base import RawListing
from pricehub.scrapers.factory import AdapterFactory
from pricehub.services.assembler import ListingRecord
from pricehub.services.history_service import HistoryService
from pricehub.services.home_feed_service import HomeFeedService, cheapest_products


CATEGORIES = ["smartphones", "laptops", "headphones", "tshirts", "bags", "shoes"]


def _category_listings(platform, category):
    prices = ["₹4,999", "₹799", "₹12,499", "Currently unavailable", "₹1,299", "₹349", "₹2,000", "₹999"]
    return [
        RawListing(platform=platform, name=f"{category} {i}", price=price, link=f"https://example.com/{i}")
        for i, price in enumerate(prices)
    ]


@pytest.fixture
def feed_factory(make_adapter) -> AdapterFactory:
    results = {c: _category_listings("amazon", c) for c in CATEGORIES}
    factory = AdapterFactory()
    factory.register_adapter("amazon", make_adapter("amazon", results, fail_on=["laptops"]))
    return factory


# ============================================================================
# TESTS: HOME FEED
# ============================================================================

class TestHomeFeedService:
    """Tests for HomeFeedService."""

    def test_cheapest_products_sorted_and_limited(self):
        products = cheapest_products(_category_listings("flipkart", "bags"), "flipkart", limit=5)

        assert [p.price for p in products] == [
            Decimal("349"), Decimal("799"), Decimal("999"), Decimal("1299"), Decimal("2000"),
        ]
        assert all(p.platform == "flipkart" for p in products)

    def test_cheapest_products_fewer_than_limit(self):
        raw = [RawListing(platform="amazon", name="Tote Bag", price="₹599")]

        assert len(cheapest_products(raw, "amazon", limit=5)) == 1

    async def test_failing_category_is_omitted(self, feed_factory, calls):
        service = HomeFeedService(feed_factory, platforms=["amazon"], categories=CATEGORIES, top_n=5)

        sections = await service.home_feed()

        assert [s.category for s in sections] == ["smartphones", "headphones", "tshirts", "bags", "shoes"]
        assert all(s.platform == "amazon" for s in sections)
        assert all(len(s.products) == 5 for s in sections)
        assert [q for _, q in calls] == CATEGORIES

    async def test_each_section_holds_cheapest_products(self, feed_factory):
        service = HomeFeedService(feed_factory, platforms=["amazon"], categories=["shoes"], top_n=3)

        [section] = await service.home_feed()

        assert [p.name for p in section.products] == ["shoes 5", "shoes 1", "shoes 7"]
        assert section.products[0].price == Decimal("349")

    async def test_empty_scrape_yields_empty_section(self, make_adapter):
        factory = AdapterFactory()
        factory.register_adapter("flipkart", make_adapter("flipkart", {}))
        service = HomeFeedService(factory, platforms=["flipkart"], categories=["bags"])

        sections = await service.home_feed()

        assert len(sections) == 1
        assert sections[0].products == []

    async def test_one_platform_for_whole_feed(self, make_adapter, calls):
        factory = AdapterFactory()
        factory.register_adapter("amazon", make_adapter("amazon", {}))
        factory.register_adapter("flipkart", make_adapter("flipkart", {}))
        service = HomeFeedService(
            factory,
            platforms=["amazon", "flipkart"],
            categories=CATEGORIES,
            rng=random.Random(7),
        )

        await service.home_feed()

        assert len({platform for platform, _ in calls}) == 1

    def test_choose_platform_uses_rng(self, feed_factory):
        picks = {
            HomeFeedService(feed_factory, platforms=["amazon", "flipkart"], rng=random.Random(seed)).choose_platform()
            for seed in range(20)
        }

        assert picks == {"amazon", "flipkart"}

    async def test_missing_adapter_raises(self, feed_factory):
        service = HomeFeedService(feed_factory, platforms=["flipkart"], categories=CATEGORIES)

        with pytest.raises(AdapterNotFoundError):
            await service.home_feed()

    def test_defaults_from_settings(self, feed_factory):
        service = HomeFeedService(feed_factory)

        assert service.platforms == ["amazon", "flipkart"]
        assert service.categories == CATEGORIES
        assert service.top_n == 5


# ============================================================================
# TESTS: SEARCH HISTORY
# ============================================================================

class TestHistoryService:
    """Tests for HistoryService."""

    async def test_recent_queries_default_limit(self, store, clock):
        for query in ["iphone", "laptop", "shoes", "watch", "kurta"]:
            record = ListingRecord(
                id=1,
                platform="amazon",
                name=f"{query} item",
                price=Decimal("100"),
                search_query=query,
                search_platforms="amazon,flipkart",
                searched_at=clock(),
            )
            await store.replace_scope(query, "amazon,flipkart", [record])
            clock.advance(minutes=2)

        queries = await HistoryService(store).recent_queries()

        assert queries == ["kurta", "watch", "shoes", "laptop"]

    async def test_recent_queries_empty(self, store):
        assert await HistoryService(store).recent_queries() == []
