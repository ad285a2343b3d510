"""
==============================================================================
Catalog Package - Product Storage
==============================================================================

In-memory product catalog.

Classes:
--------
- Product: Stored product model
- ProductCandidate: Validated payload awaiting an id
- ProductCatalog: Thread-safe ordered store

==============================================================================
"""

from .models import Product, ProductCandidate
from .catalog import ProductCatalog, load_catalog

__all__ = [
    "Product",
    "ProductCandidate",
    "ProductCatalog",
    "load_catalog",
]
