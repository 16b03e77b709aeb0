"""PriceHub backend: multi-marketplace product search with a freshness cache."""

__version__ = "0.1.0"
