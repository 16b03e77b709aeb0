"""Marketplace-specific adapter implementations.

Each adapter inherits from BaseScraperAdapter and only knows how to build
a search URL and read listing cards out of the rendered HTML.
"""

from .amazon import AmazonAdapter
from .flipkart import FlipkartAdapter
from .meesho import MeeshoAdapter
from .myntra import MyntraAdapter

__all__ = [
    "AmazonAdapter",
    "FlipkartAdapter",
    "MeeshoAdapter",
    "MyntraAdapter",
]
