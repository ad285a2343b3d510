"""
==============================================================================
Product Catalog Module
==============================================================================

In-memory product store.

Features:
---------
- Ordered collection, insertion order preserved
- Opaque UUID identifiers assigned on insert
- Thread-safe access (FastAPI runs sync endpoints in a thread pool)
- Snapshot reads: callers always receive copies
- Optional JSON seed file

Seed File Structure:
-------------------
[
  {"name": "...", "description": "...", "price": 9.99,
   "category": "...", "inStock": true},
  ...
]

==============================================================================
"""

from __future__ import annotations

import json
import logging
import threading
import uuid
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional

from app.core import exceptions
from .models import Product, ProductCandidate


# Module logger
logger = logging.getLogger(__name__)


class ProductCatalog:
    """
    Authoritative in-memory sequence of products.

    Only this class mutates the collection. Every read returns copies,
    so later mutations never leak into earlier results.

    Example:
        >>> catalog = ProductCatalog()
        >>> product = catalog.insert(candidate)
        >>> catalog.get_by_id(product.id) == product
        True
    """

    def __init__(self, products: Optional[Iterable[Product]] = None) -> None:
        """
        Initialize catalog.

        Args:
            products: Initial stored products, kept in the given order
        """
        self._lock = threading.RLock()
        self._products: List[Product] = [p.model_copy() for p in products or []]
        self._issued_ids = {p.id for p in self._products}

    # =========================================================================
    # CONSTRUCTION
    # =========================================================================

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, Any]],
        validator
    ) -> "ProductCatalog":
        """
        Build a catalog from raw seed records.

        Each record is validated like a create request and gets a fresh id.

        Args:
            records: Raw product mappings
            validator: ProductValidator used for create requests

        Raises:
            AppException: ValidationError if a record is invalid
        """
        catalog = cls()
        for record in records:
            catalog.insert(validator.validate_or_raise(record))
        return catalog

    @classmethod
    def from_file(cls, products_file: Path, validator) -> "ProductCatalog":
        """
        Build a catalog from a JSON seed file.

        A missing file yields an empty catalog.

        Raises:
            json.JSONDecodeError: If the file is not valid JSON
            ValueError: If the file does not hold a JSON array
        """
        if not products_file.exists():
            logger.warning(f"⚠️ Products file not found: {products_file}")
            return cls()

        with products_file.open("r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                logger.error(f"Invalid JSON in {products_file}: {e}")
                raise

        if not isinstance(data, list):
            raise ValueError(f"Seed file must contain a JSON array: {products_file}")

        catalog = cls.from_records(data, validator)
        logger.info(f"✅ Loaded {len(catalog)} products from {products_file}")
        return catalog

    # =========================================================================
    # READS
    # =========================================================================

    def list(self) -> List[Product]:
        """Get an ordered snapshot of all products."""
        with self._lock:
            return [p.model_copy() for p in self._products]

    def get_by_id(self, product_id: str) -> Product:
        """
        Find product by id.

        Raises:
            AppException: NotFoundError if no product has that id
        """
        with self._lock:
            return self._products[self._index_of(product_id)].model_copy()

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def insert(self, candidate: ProductCandidate) -> Product:
        """Assign a fresh id, append and return the stored product."""
        with self._lock:
            product = Product.from_candidate(self._new_id(), candidate)
            self._products.append(product)
            logger.debug(f"Inserted product {product.id}")
            return product.model_copy()

    def replace(self, product_id: str, candidate: ProductCandidate) -> Product:
        """
        Replace every field except the id, keeping the position.

        Raises:
            AppException: NotFoundError if no product has that id
        """
        with self._lock:
            index = self._index_of(product_id)
            product = Product.from_candidate(product_id, candidate)
            self._products[index] = product
            logger.debug(f"Replaced product {product_id} at position {index}")
            return product.model_copy()

    def remove(self, product_id: str) -> Product:
        """
        Remove a product and return it.

        Raises:
            AppException: NotFoundError if no product has that id
        """
        with self._lock:
            index = self._index_of(product_id)
            removed = self._products.pop(index)
            logger.debug(f"Removed product {product_id}")
            return removed

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _index_of(self, product_id: str) -> int:
        for index, product in enumerate(self._products):
            if product.id == product_id:
                return index
        raise exceptions.product_not_found()

    def _new_id(self) -> str:
        # ids are never reused, even after removal
        while True:
            product_id = str(uuid.uuid4())
            if product_id not in self._issued_ids:
                self._issued_ids.add(product_id)
                return product_id


# =============================================================================
# LOADING
# =============================================================================

def load_catalog(validator, products_file: Optional[Path] = None) -> ProductCatalog:
    """
    Build the startup catalog.

    Args:
        validator: ProductValidator applied to seed records
        products_file: Seed file; None starts an empty catalog

    Returns:
        ProductCatalog instance
    """
    if products_file is None:
        logger.info("Starting with an empty catalog")
        return ProductCatalog()
    return ProductCatalog.from_file(products_file, validator)
