"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from pricehub.models import Base
from pricehub.scrapers.base import BaseAdapter, RawListing
from pricehub.scrapers.factory import AdapterFactory
from pricehub.services.listing_store import ListingStore


@pytest.fixture
def anyio_backend():
    """Use asyncio as the async backend for tests."""
    return "asyncio"


@pytest_asyncio.fixture
async def session_factory():
    """In-memory SQLite database with the listings table created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def store(session_factory) -> ListingStore:
    return ListingStore(session_factory)


class FakeClock:
    """Settable clock; call it to read the current time."""

    def __init__(self, now: Optional[datetime] = None):
        self.now = now or datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


def listing(platform: str, name: str, price: str, **kwargs) -> RawListing:
    return RawListing(platform=platform, name=name, price=price, **kwargs)


@pytest.fixture
def calls() -> List[tuple]:
    """Shared log of (platform, query) pairs in adapter call order."""
    return []


@pytest.fixture
def make_adapter(calls):
    """Build an in-memory adapter class for a platform.

    ``results`` maps a query to the listings returned for it; the "*" key
    is the fallback. Queries listed in ``fail_on`` raise instead.
    """

    def _make(
        platform: str,
        results: Optional[Dict[str, List[RawListing]]] = None,
        fail_on: Iterable[str] = (),
    ):
        results = results or {}
        fail_on = set(fail_on)

        class FakeAdapter(BaseAdapter):
            adapter_type = "api"

            async def search(self, query: str) -> List[RawListing]:
                calls.append((self.platform, query))
                if "*" in fail_on or query in fail_on:
                    raise RuntimeError(f"{self.platform} is unreachable")
                return list(results.get(query, results.get("*", [])))

        FakeAdapter.platform = platform
        FakeAdapter.display_name = platform.title()
        return FakeAdapter

    return _make


@pytest.fixture
def amazon_listings() -> List[RawListing]:
    return [
        listing("amazon", "Apple iPhone 15 (128 GB) - Black", "₹69,900", link="https://www.amazon.in/dp/B0CHX1W1XY"),
        listing("amazon", "Apple iPhone 15 Plus (128 GB) - Blue", "₹79,900", link="https://www.amazon.in/dp/B0CHX2F5QT"),
        listing("amazon", "Apple iPhone 15 Pro (256 GB)", "₹1,44,900", link="https://www.amazon.in/dp/B0CHX6NQMD"),
    ]


@pytest.fixture
def flipkart_listings() -> List[RawListing]:
    return [
        listing("flipkart", "Apple iPhone 15 (Black, 128 GB)", "₹65,999", image="https://rukminim2.flixcart.com/a.jpg"),
        listing("flipkart", "Apple iPhone 15 (Pink, 128 GB)", "₹66,499", image="https://rukminim2.flixcart.com/b.jpg"),
    ]


@pytest.fixture
def factory(make_adapter, amazon_listings, flipkart_listings) -> AdapterFactory:
    """Factory with fake amazon and flipkart adapters."""
    adapter_factory = AdapterFactory()
    adapter_factory.register_adapter("amazon", make_adapter("amazon", {"*": amazon_listings}))
    adapter_factory.register_adapter("flipkart", make_adapter("flipkart", {"*": flipkart_listings}))
    return adapter_factory
