"""Site adapter layer.

This package provides:
- Base adapter classes and the RawListing record adapters return
- Marketplace adapters driven by a shared Playwright browser
- A factory/registry that resolves platform slugs to adapters
- run_adapter, the single call site that captures adapter failures
"""

from .base import BaseAdapter, BaseScraperAdapter, RawListing
from .factory import AdapterFactory, adapter_factory, get_adapter_factory
from .runner import AdapterOutcome, run_adapter

__all__ = [
    # Base classes
    "BaseAdapter",
    "BaseScraperAdapter",
    # Data structures
    "RawListing",
    "AdapterOutcome",
    # Factory
    "AdapterFactory",
    "adapter_factory",
    "get_adapter_factory",
    # Runner
    "run_adapter",
]
