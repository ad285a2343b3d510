"""
==============================================================================
Product Schemas Module
==============================================================================

Query and response schemas for the product endpoints.

Wire names are camelCase; Python attributes are snake_case with aliases.

==============================================================================
"""

import re
from typing import ClassVar, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from app.catalog.models import Product


# =============================================================================
# QUERY SCHEMAS
# =============================================================================

LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_positive_int(raw: Optional[str], default: int) -> int:
    """
    Parse the leading base-10 integer of a query value.

    Trailing text is ignored, so "2.5" reads as 2 and "3abc" as 3.
    Missing, non-numeric and non-positive values all give the default.
    """
    if raw is None:
        return default
    match = LEADING_INT.match(raw)
    if match is None:
        return default
    value = int(match.group(1))
    return value if value > 0 else default


class ProductQuery(BaseModel):
    """Parsed listing parameters for the query pipeline."""

    DEFAULT_PAGE: ClassVar[int] = 1
    DEFAULT_LIMIT: ClassVar[int] = 10

    category: Optional[str] = None
    in_stock: Optional[bool] = None
    search: Optional[str] = None
    page: int = Field(default=DEFAULT_PAGE, ge=1)
    limit: int = Field(default=DEFAULT_LIMIT, ge=1)

    @classmethod
    def from_params(
        cls,
        category: Optional[str] = None,
        in_stock: Optional[str] = None,
        search: Optional[str] = None,
        page: Optional[str] = None,
        limit: Optional[str] = None,
    ) -> "ProductQuery":
        """
        Build a query from raw query-string values.

        Empty category/search strings apply no filter. A present inStock
        value filters on in-stock only when it is exactly "true".
        """
        return cls(
            category=category or None,
            in_stock=None if in_stock is None else in_stock == "true",
            search=search or None,
            page=parse_positive_int(page, cls.DEFAULT_PAGE),
            limit=parse_positive_int(limit, cls.DEFAULT_LIMIT),
        )


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class PaginationInfo(BaseModel):
    """Pagination metadata computed over the filtered set."""

    model_config = ConfigDict(populate_by_name=True)

    current_page: int = Field(..., alias="currentPage")
    total_pages: int = Field(..., alias="totalPages", ge=0)
    total_products: int = Field(..., alias="totalProducts", ge=0)
    has_next: bool = Field(..., alias="hasNext")
    has_prev: bool = Field(..., alias="hasPrev")


class ProductListResponse(BaseModel):
    """One page of the product listing."""
    products: List[Product]
    pagination: PaginationInfo


class SearchResponse(BaseModel):
    """Unpaginated search results."""
    query: str
    results: List[Product]
    count: int = Field(ge=0)


class StatsResponse(BaseModel):
    """
    Aggregate statistics over the whole catalog.

    averagePrice is a two-decimal string, or the number 0 for an empty
    catalog. totalValue is always a two-decimal string.
    """

    model_config = ConfigDict(populate_by_name=True)

    total_products: int = Field(..., alias="totalProducts", ge=0)
    in_stock_count: int = Field(..., alias="inStockCount", ge=0)
    out_of_stock_count: int = Field(..., alias="outOfStockCount", ge=0)
    category_counts: Dict[str, int] = Field(..., alias="categoryCounts")
    average_price: Union[str, int] = Field(..., alias="averagePrice")
    total_value: str = Field(..., alias="totalValue")


class ProductMessageResponse(BaseModel):
    """Envelope for create, update and delete."""
    message: str
    product: Product
