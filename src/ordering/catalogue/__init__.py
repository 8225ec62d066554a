"""Catalogue lookup factory.

Provides get_product_lookup() / set_product_lookup() to swap implementations:
- DocumentStoreCatalogue (default) reads product documents from the store
- any other ProductLookup can be installed for tests or other deployments
"""

import os

from ordering.catalogue.port import ProductLookup

_current_lookup: ProductLookup | None = None


def get_product_lookup() -> ProductLookup:
    """Return the active catalogue adapter, selected by PRODUCT_LOOKUP_ADAPTER."""
    global _current_lookup
    if _current_lookup is None:
        adapter = os.environ.get("PRODUCT_LOOKUP_ADAPTER", "store")
        if adapter == "store":
            from ordering.catalogue.store_adapter import DocumentStoreCatalogue

            _current_lookup = DocumentStoreCatalogue()
        else:
            raise ValueError(f"Unknown product lookup adapter: {adapter}")
    return _current_lookup


def set_product_lookup(lookup: ProductLookup) -> None:
    """Override the active catalogue adapter (useful for tests)."""
    global _current_lookup
    _current_lookup = lookup


def reset_product_lookup() -> None:
    """Reset to the configured default adapter."""
    global _current_lookup
    _current_lookup = None
