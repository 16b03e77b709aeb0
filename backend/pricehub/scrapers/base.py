"""Base site adapter interface.

All platform-specific scrapers inherit from BaseAdapter and return
RawListing objects. Adapters do not clean prices or validate records;
that happens at the assembler boundary.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import urljoin

import structlog
from playwright.async_api import (
    BrowserContext,
    Error as PlaywrightError,
    Page,
    TimeoutError as PlaywrightTimeout,
)

from pricehub.config import settings
from pricehub.core.exceptions import AdapterFailure
from pricehub.scrapers.utils.retry import playwright_retry


@dataclass
class RawListing:
    """Listing exactly as an adapter scraped it.

    ``price`` is the uncleaned price text (e.g. "₹1,234"). ``image`` and
    ``link`` are optional because card layouts do not always expose them.
    """

    platform: str
    name: str
    price: str
    image: Optional[str] = None
    link: Optional[str] = None


class BaseAdapter(ABC):
    """Abstract base class for all site adapters.

    An adapter turns a query or category string into raw listings for one
    marketplace. "No results" must be an empty list; navigation or timeout
    problems may raise.
    """

    platform: str = ""  # Must be overridden in subclass (e.g., "amazon")
    display_name: str = ""
    adapter_type: str = ""  # 'scraper' or 'api'

    def __init__(self):
        self.logger = structlog.get_logger(adapter=self.platform)

    @abstractmethod
    async def search(self, query: str) -> List[RawListing]:
        """Fetch raw listings for a search term.

        Args:
            query: Search query or home feed category name

        Returns:
            List of RawListing objects, possibly empty

        Raises:
            AdapterFailure: If the marketplace could not be scraped
        """
        pass

    async def cleanup(self) -> None:
        """Release adapter resources."""


class BaseScraperAdapter(BaseAdapter):
    """Base class for browser-driven adapters using Playwright.

    Subclasses provide the search URL, the selector that signals product
    cards are present, and an HTML parser. The browser context is injected
    by the adapter runner from the shared BrowserManager.
    """

    adapter_type = "scraper"
    base_url: str = ""
    card_selector: str = ""
    scroll_rounds: int = 1

    def __init__(self):
        super().__init__()
        self.browser_context: Optional[BrowserContext] = None

    @abstractmethod
    def build_search_url(self, query: str) -> str:
        """Return the marketplace search URL for a query."""

    @abstractmethod
    def parse_listings(self, html: str) -> List[RawListing]:
        """Extract raw listings from a rendered search page."""

    async def search(self, query: str) -> List[RawListing]:
        if not self.browser_context:
            raise AdapterFailure(self.platform, "browser context was not injected")

        url = self.build_search_url(query)
        page = await self.browser_context.new_page()
        try:
            html = await self._safe_scrape(page, url, self.card_selector)
        except PlaywrightTimeout as e:
            raise AdapterFailure(self.platform, f"timed out loading {url}: {e}") from e
        except PlaywrightError as e:
            raise AdapterFailure(self.platform, f"navigation failed for {url}: {e}") from e
        finally:
            try:
                await page.close()
            except PlaywrightError as e:
                self.logger.debug("page_close_failed", error=str(e))

        if html is None:
            self.logger.warning("product_cards_not_found", query=query, url=url)
            return []

        listings = self.parse_listings(html)
        self.logger.info("listings_scraped", query=query, count=len(listings))
        return listings

    @playwright_retry
    async def _safe_scrape(
        self, page: Page, url: str, wait_selector: Optional[str] = None
    ) -> Optional[str]:
        """Load a URL and return its HTML once product cards are present.

        Args:
            page: Playwright Page instance
            url: URL to scrape
            wait_selector: CSS selector to wait for before reading the HTML

        Returns:
            HTML content, or None when the selector never appeared
        """
        self.logger.info("scraping_url", url=url)

        await page.goto(url, wait_until="domcontentloaded", timeout=settings.SCRAPE_TIMEOUT_MS)

        if wait_selector:
            try:
                await page.wait_for_selector(wait_selector, timeout=25000)
            except PlaywrightTimeout:
                return None

        # Lazy-loaded grids only render more cards after scrolling
        for _ in range(self.scroll_rounds):
            await page.evaluate("window.scrollTo(0, document.body.scrollHeight)")
            await page.wait_for_timeout(1500)

        return await page.content()

    def absolute_url(self, href: Optional[str]) -> Optional[str]:
        """Resolve a relative card link against the marketplace base URL."""
        if not href:
            return None
        if href.startswith("http"):
            return href
        return urljoin(self.base_url, href)

    async def cleanup(self) -> None:
        """Drop the reference to the injected context.

        The context itself belongs to the BrowserManager and is reused.
        """
        self.browser_context = None
