"""Scraper utilities for browser management, retries and price normalization."""

from .normalizer import INVALID_PRICE, PriceNormalizer, normalize_price
from .retry import playwright_retry
from .user_agents import USER_AGENTS, get_extra_headers, get_random_user_agent


__all__ = [
    # Normalization
    "INVALID_PRICE",
    "PriceNormalizer",
    "normalize_price",
    # Retry decorators
    "playwright_retry",
    # Browser identity
    "USER_AGENTS",
    "get_random_user_agent",
    "get_extra_headers",
]
