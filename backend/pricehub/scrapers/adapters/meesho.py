"""Meesho browser scraper adapter."""

from typing import List, Optional
from urllib.parse import quote_plus

from bs4 import BeautifulSoup

from pricehub.scrapers.base import BaseScraperAdapter, RawListing


_CARD_SELECTOR = 'div[data-testid^="product-card"], div.NewProductCardstyled__CardStyled-sc-6y2tys-0'


class MeeshoAdapter(BaseScraperAdapter):
    """Meesho search scraper via Playwright browser automation.

    Meesho lazy-loads the grid, so the page is scrolled a few times
    before the HTML is read.
    """

    platform = "meesho"
    display_name = "Meesho"
    base_url = "https://www.meesho.com"
    card_selector = _CARD_SELECTOR
    scroll_rounds = 3

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
        name_elem = card.select_one("p.ejhQZU") or card.select_one("p")
        price_elem = card.select_one("h5.dwCrSh") or card.select_one("h5")

        # The card is usually wrapped by its product anchor
        anchor = card.find_parent("a") or card.select_one("a[href]")
        link = self.absolute_url(anchor.get("href")) if anchor else None

        if not (name_elem and price_elem and link):
            return None

        img = card.select_one("img")
        image = (img.get("src") or img.get("data-src")) if img else None

        return RawListing(
            platform=self.platform,
            name=name_elem.get_text(strip=True),
            price=price_elem.get_text(strip=True),
            image=image,
            link=link,
        )
