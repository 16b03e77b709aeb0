"""Price parsing utilities for raw scraped listings."""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional, Union

import structlog

logger = structlog.get_logger()


# First number in the text: digits with optional thousands separators and
# an optional decimal part, or a bare fraction such as "$.99". The dot of
# a label such as "Rs.2,499" is not a decimal point.
_PRICE_PATTERN = re.compile(r"\d[\d,]*(?:\.\d+)?|(?<![A-Za-z])\.\d+")

INVALID_PRICE = Decimal("0")

# Listing.price is Numeric(12, 2)
PRICE_QUANTUM = Decimal("0.01")
MAX_PRICE = Decimal("9999999999.99")

RawPrice = Union[str, int, float, Decimal, None]


class PriceNormalizer:
    """Turns marketplace price text into a positive Decimal.

    Handles the formats the supported marketplaces render:
    - "₹1,234" -> 1234
    - "$99.99" -> 99.99
    - "Rs. 2,499" -> 2499
    - "₹1,299 ₹2,999" (sale + MRP) -> 1299
    """

    @staticmethod
    def clean_price_string(raw: RawPrice) -> Optional[Decimal]:
        """Parse a price string and extract its numeric value.

        Currency symbols, labels, whitespace and thousands separators are
        stripped. When several numbers appear, the first one wins.

        Args:
            raw: Raw price text (or an already numeric price)

        Returns:
            Decimal price value, or None if no number could be parsed
        """
        if raw is None:
            return None
        if isinstance(raw, (int, float, Decimal)) and not isinstance(raw, bool):
            try:
                return Decimal(str(raw))
            except InvalidOperation:
                return None

        match = _PRICE_PATTERN.search(str(raw))
        if not match:
            return None

        try:
            return Decimal(match.group(0).replace(",", ""))
        except InvalidOperation:
            return None

    @classmethod
    def normalize(cls, raw: RawPrice) -> Decimal:
        """Normalize a raw price, returning INVALID_PRICE when unusable.

        Valid prices are rounded half-up to paise. Zero, negative,
        unparseable and out-of-range prices all collapse to the sentinel,
        which callers treat as a rejection rather than a real price.
        """
        price = cls.clean_price_string(raw)
        if price is None or not price.is_finite() or price > MAX_PRICE:
            return INVALID_PRICE

        # Scale matches Listing.price
        price = price.quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)
        if price <= 0 or price > MAX_PRICE:
            return INVALID_PRICE
        return price

    @classmethod
    def is_valid(cls, raw: RawPrice) -> bool:
        """Whether a raw price normalizes to a usable positive value."""
        return cls.normalize(raw) > 0


def normalize_price(raw: RawPrice) -> Decimal:
    """Module-level shortcut for PriceNormalizer.normalize."""
    return PriceNormalizer.normalize(raw)
