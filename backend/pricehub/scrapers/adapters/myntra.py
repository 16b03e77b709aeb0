"""Myntra browser scraper adapter.

Myntra search pages live at https://www.myntra.com/<query>. Prices render
as "Rs. 2,499"; cleaning is left to the price normalizer.
"""

import re
from typing import List, Optional
from urllib.parse import quote

from bs4 import BeautifulSoup

from pricehub.scrapers.base import BaseScraperAdapter, RawListing


_HIGH_RES_SRC = re.compile(r"(https://[^\s,]+)\s+2\.0x")


class MyntraAdapter(BaseScraperAdapter):
    """Myntra search scraper via Playwright browser automation."""

    platform = "myntra"
    display_name = "Myntra"
    base_url = "https://www.myntra.com"
    card_selector = ".product-base"

    def build_search_url(self, query: str) -> str:
        return f"{self.base_url}/{quote(query)}"

    def parse_listings(self, html: str) -> List[RawListing]:
        soup = BeautifulSoup(html, "html.parser")
        listings = []

        for card in soup.select(self.card_selector):
            listing = self._parse_card(card)
            if listing:
                listings.append(listing)

        return listings

    def _parse_card(self, card) -> Optional[RawListing]:
        brand = card.select_one(".product-brand")
        product = card.select_one(".product-product")
        name = " ".join(
            elem.get_text(strip=True) for elem in (brand, product) if elem
        ).strip()

        price_elem = card.select_one(".product-discountedPrice") or card.select_one(".product-price")
        price = price_elem.get_text(strip=True) if price_elem else None

        anchor = card.select_one("a[href]")
        link = self.absolute_url(anchor["href"].lstrip("/")) if anchor else None

        if not (name and price and link):
            return None

        return RawListing(
            platform=self.platform,
            name=name,
            price=price,
            image=self._extract_image(card),
            link=link,
        )

    def _extract_image(self, card) -> Optional[str]:
        # <picture><source srcset="... 1.0x, ... 2.0x"> holds the sharp image
        source = card.select_one("picture source")
        if source and source.get("srcset"):
            match = _HIGH_RES_SRC.search(source["srcset"])
            if match:
                return match.group(1)

        img = card.select_one("img")
        if img:
            return img.get("src") or img.get("data-src")
        return None
