"""Flipkart browser scraper adapter.

Flipkart renders several card layouts (electronics rows, fashion grid,
accessory tiles) with obfuscated class names; each selector list below
covers one field across all of them.
"""

from typing import List, Optional
from urllib.parse import quote_plus

from bs4 import BeautifulSoup

from pricehub.scrapers.base import BaseScraperAdapter, RawListing


_CARD_SELECTOR = "div.tUxRFH, div._1AtVbE, div._1sdMkc.LFEi7Z, div.slAVV4"

_NAME_SELECTORS = [".KzDlHZ", "a.IRpwTa", "a.s1Q9rs", ".WKTcLC", ".wjcEIp"]
_PRICE_SELECTORS = [".Nx9bqj", "._30jeq3"]
_LINK_SELECTORS = ["a.rPDeLR", "a.VJA3rP", "a[href*='/p/']", "a[href]"]


class FlipkartAdapter(BaseScraperAdapter):
    """Flipkart search scraper via Playwright browser automation."""

    platform = "flipkart"
    display_name = "Flipkart"
    base_url = "https://www.flipkart.com"
    # Present on every product tile regardless of layout
    card_selector = "div[data-tkid]"

    def build_search_url(self, query: str) -> str:
        return f"{self.base_url}/search?q={quote_plus(query)}"

    def parse_listings(self, html: str) -> List[RawListing]:
        soup = BeautifulSoup(html, "html.parser")
        listings = []

        for card in soup.select(_CARD_SELECTOR):
            listing = self._parse_card(card)
            if listing:
                listings.append(listing)

        return listings

    def _parse_card(self, card) -> Optional[RawListing]:
        name = None
        for sel in _NAME_SELECTORS:
            elem = card.select_one(sel)
            if elem:
                name = elem.get("title") or elem.get_text(strip=True)
                if name:
                    break

        price = None
        for sel in _PRICE_SELECTORS:
            elem = card.select_one(sel)
            if elem and elem.get_text(strip=True):
                price = elem.get_text(strip=True)
                break

        if not (name and price):
            return None

        link = None
        for sel in _LINK_SELECTORS:
            elem = card.select_one(sel)
            if elem and elem.get("href"):
                link = self.absolute_url(elem["href"])
                break

        image = None
        img = card.select_one("img")
        if img:
            image = img.get("src") or img.get("data-src")

        return RawListing(
            platform=self.platform,
            name=name,
            price=price,
            image=image,
            link=link,
        )
