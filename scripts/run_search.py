"""Manual search runner for testing and debugging marketplace scrapers.

With --platform, runs one adapter against the live search page and prints
what it scraped, without touching the database. With --platforms, runs a
full cached search (cache lookup, sequential scrapes, rewrite) against the
configured database and prints the interleaved result.

Usage:
    python scripts/run_search.py --platform amazon --query "iphone 15"
    python scripts/run_search.py --platform myntra --query shirts --limit 5
    python scripts/run_search.py --platforms amazon,flipkart --query "iphone 15"
"""

import argparse
import asyncio
import os
import sys

# Add backend to path so we can import pricehub modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "backend"))

from pricehub.config import settings
from pricehub.core.exceptions import PriceHubException
from pricehub.db.session import async_session_factory, engine
from pricehub.models import Base
from pricehub.scrapers.factory import AdapterFactory
from pricehub.scrapers.register_adapters import register_all_adapters
from pricehub.scrapers.runner import run_adapter
from pricehub.scrapers.utils.browser_manager import get_browser_manager
from pricehub.scrapers.utils.normalizer import PriceNormalizer
from pricehub.services.listing_store import ListingStore
from pricehub.services.search_service import SearchService


def _banner(title: str) -> None:
    print(f"\n{'=' * 70}")
    print(f"  {title}")
    print(f"{'=' * 70}\n")


async def run_single(factory: AdapterFactory, platform: str, query: str, limit: int) -> int:
    """Run one adapter and display its raw listings."""
    adapter = factory.create_adapter(platform)
    if adapter is None:
        print(f"\nError: Unknown platform '{platform}'")
        print("\nAvailable platforms:")
        for slug in sorted(factory.get_registered_platforms()):
            print(f"   - {slug}")
        return 1

    _banner(f"{adapter.display_name} search: {query!r}")

    outcome = await run_adapter(adapter, query)
    if not outcome.ok:
        print(f"Scrape failed: {outcome.error.message}\n")
        return 1

    if not outcome.listings:
        print("No listings found.\n")
        return 0

    shown = outcome.listings[:limit]
    for i, listing in enumerate(shown, 1):
        price = PriceNormalizer.normalize(listing.price)
        marker = "" if price > 0 else "  (rejected)"
        print(f"[{i}] {listing.name}")
        print(f"    Price: {listing.price} -> {price:,.2f}{marker}")
        if listing.link:
            print(f"    URL:   {listing.link[:80]}")
        if listing.image:
            print(f"    Image: {listing.image[:80]}")
        print()

    valid = sum(1 for l in outcome.listings if PriceNormalizer.is_valid(l.price))
    _banner(f"Scraped: {len(outcome.listings)}  Valid prices: {valid}  Displayed: {len(shown)}")
    return 0


async def run_orchestrated(factory: AdapterFactory, platforms: str, query: str, limit: int) -> int:
    """Run a full cached search and display the interleaved records."""
    _banner(f"Search {query!r} on {platforms}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    service = SearchService(ListingStore(async_session_factory), factory)
    try:
        records = await service.search(query, platforms)
    except PriceHubException as e:
        print(f"Search failed [{e.code}]: {e.message}\n")
        return 1
    finally:
        await engine.dispose()

    for record in records[:limit]:
        print(f"[{record.id:>3}] {record.platform:<9} {record.price:>10,.2f}  {record.name[:50]}")

    _banner(f"Results: {len(records)}  Displayed: {min(limit, len(records))}")
    return 0


async def run_search(args) -> int:
    settings.BROWSER_HEADLESS = not args.headful
    factory = register_all_adapters(AdapterFactory())

    try:
        if args.platforms:
            return await run_orchestrated(factory, args.platforms, args.query, args.limit)
        return await run_single(factory, args.platform, args.query, args.limit)
    finally:
        await get_browser_manager().stop()


def main():
    """Parse arguments and run the search."""
    parser = argparse.ArgumentParser(
        description="Run a marketplace search for testing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/run_search.py --platform amazon --query "iphone 15"
  python scripts/run_search.py --platform meesho --query kurti --limit 5
  python scripts/run_search.py --platforms amazon,flipkart --query shoes
        """,
    )

    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--platform", help="Run a single adapter (e.g., 'amazon', 'myntra')")
    target.add_argument("--platforms", help="Run a cached search on a platform pair (e.g., 'amazon,flipkart')")

    parser.add_argument("--query", required=True, help="Search query or category name")
    parser.add_argument(
        "--limit",
        type=int,
        default=10,
        help="Maximum number of listings to display (default: 10)",
    )
    parser.add_argument("--headful", action="store_true", help="Show the browser window")

    args = parser.parse_args()
    sys.exit(asyncio.run(run_search(args)))


if __name__ == "__main__":
    main()
