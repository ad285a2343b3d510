"""
==============================================================================
Schemas Package - Pydantic Models
==============================================================================

Request and response schemas using Pydantic for validation.

This package provides:
- Common: Shared message and error envelopes
- Product: Listing query, pagination, search and stats schemas

==============================================================================
"""

from .common import MessageResponse, ErrorResponse
from .product import (
    ProductQuery,
    PaginationInfo,
    ProductListResponse,
    SearchResponse,
    StatsResponse,
    ProductMessageResponse,
    parse_positive_int,
)

__all__ = [
    # Common
    "MessageResponse",
    "ErrorResponse",
    # Product
    "ProductQuery",
    "PaginationInfo",
    "ProductListResponse",
    "SearchResponse",
    "StatsResponse",
    "ProductMessageResponse",
    "parse_positive_int",
]
