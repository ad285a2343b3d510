"""
==============================================================================
Catalog Service Module
==============================================================================

Business logic for the product catalog.

This module implements:
- CatalogService: CRUD orchestration, the listing query pipeline,
  dedicated search and aggregate statistics

Query Pipeline:
--------------
Applied in a fixed order so pagination metadata reflects the fully
filtered set:

    category filter → stock filter → search filter → pagination

All operations run synchronously against the in-memory catalog and
raise AppException on failure.

==============================================================================
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Mapping, Optional

from app.catalog.catalog import ProductCatalog
from app.catalog.models import Product
from app.core import exceptions
from app.schemas.product import (
    PaginationInfo,
    ProductListResponse,
    ProductQuery,
    SearchResponse,
    StatsResponse,
)
from app.utils.validators import ProductValidator


# Module logger
logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def to_fixed(value: float) -> str:
    """
    Format a number with two decimals, rounding ties away from zero.

    Decimal(float) is exact, so a value sitting exactly on a tie such as
    1.125 becomes "1.13" rather than the half-to-even "1.12".
    """
    return str(Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP))


class CatalogService:
    """
    Catalog operations used by the product endpoints.

    Attributes:
        _catalog: Product store
        _validator: Payload validator for create and update

    Example:
        >>> service = CatalogService(ProductCatalog())
        >>> product = service.create_product({
        ...     "name": "Desk Lamp", "description": "LED desk lamp",
        ...     "price": 25.0, "category": "Home", "inStock": True,
        ... })
        >>> service.get_stats().total_products
        1
    """

    def __init__(
        self,
        catalog: ProductCatalog,
        validator: Optional[ProductValidator] = None
    ) -> None:
        """
        Initialize the catalog service.

        Args:
            catalog: Product store
            validator: Optional ProductValidator (a new one if None)
        """
        self._catalog = catalog
        self._validator = validator or ProductValidator()

    @property
    def catalog(self) -> ProductCatalog:
        return self._catalog

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    def get_product(self, product_id: str) -> Product:
        """
        Get a product by id.

        Raises:
            AppException: NotFoundError if the id is unknown
        """
        return self._catalog.get_by_id(product_id)

    def list_products(self, query: ProductQuery) -> ProductListResponse:
        """
        Filter, search and paginate the catalog.

        Args:
            query: Parsed listing parameters

        Returns:
            One page of products with pagination metadata
        """
        products = self._catalog.list()

        if query.category:
            category = query.category.lower()
            products = [p for p in products if p.category.lower() == category]

        if query.in_stock is not None:
            products = [p for p in products if p.in_stock == query.in_stock]

        if query.search:
            term = query.search.lower()
            products = [
                p for p in products
                if term in p.name.lower()
                or term in p.description.lower()
                or term in p.category.lower()
            ]

        return self._paginate(products, query.page, query.limit)

    def search(self, q: Optional[str]) -> SearchResponse:
        """
        Search names and descriptions (not categories).

        Args:
            q: Search term, required

        Returns:
            Every match, unpaginated, with a count

        Raises:
            AppException: ValidationError if q is missing or empty
        """
        if not q:
            raise exceptions.search_query_required()

        term = q.lower()
        results = [
            p for p in self._catalog.list()
            if term in p.name.lower() or term in p.description.lower()
        ]

        return SearchResponse(query=q, results=results, count=len(results))

    def get_stats(self) -> StatsResponse:
        """Compute aggregate statistics over the whole catalog."""
        products = self._catalog.list()

        category_counts: Dict[str, int] = {}
        for product in products:
            category_counts[product.category] = category_counts.get(product.category, 0) + 1

        in_stock_count = sum(1 for p in products if p.in_stock)
        total_price = sum(p.price for p in products)

        if products:
            average_price: Any = to_fixed(total_price / len(products))
        else:
            average_price = 0

        return StatsResponse(
            total_products=len(products),
            in_stock_count=in_stock_count,
            out_of_stock_count=len(products) - in_stock_count,
            category_counts=category_counts,
            average_price=average_price,
            total_value=to_fixed(total_price),
        )

    # =========================================================================
    # WRITE OPERATIONS
    # =========================================================================

    def create_product(self, payload: Mapping[str, Any]) -> Product:
        """
        Validate a payload and add it to the catalog.

        Raises:
            AppException: ValidationError listing every violated rule
        """
        candidate = self._validator.validate_or_raise(payload)
        product = self._catalog.insert(candidate)
        logger.info(f"Product created: {product.id} ({product.name})")
        return product

    def update_product(self, product_id: str, payload: Mapping[str, Any]) -> Product:
        """
        Replace every field of an existing product.

        Raises:
            AppException: ValidationError or NotFoundError
        """
        candidate = self._validator.validate_or_raise(payload)
        product = self._catalog.replace(product_id, candidate)
        logger.info(f"Product updated: {product.id} ({product.name})")
        return product

    def delete_product(self, product_id: str) -> Product:
        """
        Remove a product.

        Raises:
            AppException: NotFoundError if the id is unknown
        """
        product = self._catalog.remove(product_id)
        logger.info(f"Product deleted: {product.id} ({product.name})")
        return product

    # =========================================================================
    # HELPERS
    # =========================================================================

    @staticmethod
    def _paginate(products: List[Product], page: int, limit: int) -> ProductListResponse:
        total = len(products)
        start_index = (page - 1) * limit
        end_index = page * limit

        return ProductListResponse(
            products=products[start_index:end_index],
            pagination=PaginationInfo(
                current_page=page,
                total_pages=-(-total // limit),
                total_products=total,
                has_next=end_index < total,
                has_prev=start_index > 0,
            ),
        )
