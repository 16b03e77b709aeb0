"""Amazon India browser scraper adapter.

Searches www.amazon.in and reads the s-search-result grid. Cards are
identified by a non-empty data-asin attribute, which is stable across
product categories.
"""

from typing import List, Optional
from urllib.parse import quote_plus

from bs4 import BeautifulSoup

from pricehub.scrapers.base import BaseScraperAdapter, RawListing


_CARD_SELECTOR = 'div[data-asin]:not([data-asin=""])'

_NAME_SELECTORS = [
    "h2 span",
    ".a-size-medium.a-color-base.a-text-normal",
    "h2 span.a-size-base-plus.a-color-base.a-text-normal",
]

_LINK_SELECTORS = [
    "a.a-link-normal.s-no-outline",
    "a.a-link-normal.s-line-clamp-2",
    "a.a-link-normal.s-underline-text",
    "a[href*='/dp/']",
]

# Amazon CAPTCHA indicators - full phrases to avoid matching meta robots tags
_CAPTCHA_MARKERS = [
    "enter the characters you see below",
    "sorry, we just need to make sure you're not a robot",
    "to discuss automated access to amazon data",
]


class AmazonAdapter(BaseScraperAdapter):
    """Amazon.in search scraper via Playwright browser automation."""

    platform = "amazon"
    display_name = "Amazon"
    base_url = "https://www.amazon.in"
    card_selector = _CARD_SELECTOR

    def build_search_url(self, query: str) -> str:
        return f"{self.base_url}/s?k={quote_plus(query)}"

    def parse_listings(self, html: str) -> List[RawListing]:
        """Parse search result cards from Amazon HTML."""
        html_lower = html.lower()
        marker = next((m for m in _CAPTCHA_MARKERS if m in html_lower), None)
        if marker:
            self.logger.warning("amazon_captcha_detected", marker=marker)
            return []

        soup = BeautifulSoup(html, "html.parser")
        listings = []
        seen_asins = set()

        for card in soup.select(_CARD_SELECTOR):
            asin = card.get("data-asin")
            if asin in seen_asins:
                continue
            listing = self._parse_card(card)
            if listing:
                listings.append(listing)
                seen_asins.add(asin)

        return listings

    def _parse_card(self, card) -> Optional[RawListing]:
        name = self._extract_name(card)
        price = self._extract_price(card)
        link = None
        for sel in _LINK_SELECTORS:
            elem = card.select_one(sel)
            if elem and elem.get("href"):
                link = self.absolute_url(elem["href"])
                break

        if not (name and price and link):
            return None

        image = None
        img = card.select_one("img.s-image")
        if img:
            image = img.get("src") or img.get("data-lazy-src")

        return RawListing(
            platform=self.platform,
            name=name,
            price=price,
            image=image,
            link=link,
        )

    def _extract_name(self, card) -> Optional[str]:
        for sel in _NAME_SELECTORS:
            elem = card.select_one(sel)
            if elem:
                text = elem.get_text(strip=True)
                if text:
                    return text

        # Fashion cards split brand and title into separate spans
        brand = card.select_one("h2 span.a-size-base-plus.a-color-base, .s-line-clamp-1 .a-size-base-plus")
        title = card.select_one("h2 span.a-size-base-plus.a-color-base.a-text-normal")
        if brand and title:
            return f"{brand.get_text(strip=True)} {title.get_text(strip=True)}"
        return None

    def _extract_price(self, card) -> Optional[str]:
        # The screen-reader price carries the actual selling price
        offscreen = card.select_one(".a-price .a-offscreen")
        if offscreen and offscreen.get_text(strip=True):
            return offscreen.get_text(strip=True)

        whole = card.select_one(".a-price-whole")
        symbol = card.select_one(".a-price-symbol")
        if whole and symbol:
            return f"{symbol.get_text(strip=True)}{whole.get_text(strip=True)}"
        return None
