"""
==============================================================================
Product Catalog Endpoints
==============================================================================

CRUD, listing, search and statistics for the product catalog.

Read endpoints are public. Create, update and delete require the
x-api-key header.

Route order matters: /search and /stats are declared before /{product_id}.

==============================================================================
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from app.catalog.models import Product
from app.core.dependencies import (
    get_json_body,
    get_product_query,
    get_service,
    require_api_key,
)
from app.schemas.common import ErrorResponse
from app.schemas.product import (
    ProductListResponse,
    ProductMessageResponse,
    ProductQuery,
    SearchResponse,
    StatsResponse,
)
from app.services.catalog_service import CatalogService


router = APIRouter(prefix="/products", tags=["Products"])

NOT_FOUND = {404: {"model": ErrorResponse, "description": "Product not found"}}
BAD_REQUEST = {400: {"model": ErrorResponse, "description": "Validation failed"}}
UNAUTHORIZED = {401: {"model": ErrorResponse, "description": "Missing or invalid API key"}}


class ProductController:
    """Controller for product catalog operations."""

    def __init__(self, service: CatalogService):
        self._service = service

    def list_products(self, query: ProductQuery) -> ProductListResponse:
        """List products with filters and pagination."""
        return self._service.list_products(query)

    def search(self, q: Optional[str]) -> SearchResponse:
        """Search product names and descriptions."""
        return self._service.search(q)

    def get_stats(self) -> StatsResponse:
        """Get catalog statistics."""
        return self._service.get_stats()

    def get_product(self, product_id: str) -> Product:
        """Get product by id."""
        return self._service.get_product(product_id)

    def create(self, payload: Dict[str, Any]) -> ProductMessageResponse:
        """Create a product."""
        product = self._service.create_product(payload)
        return ProductMessageResponse(message="Product created successfully", product=product)

    def update(self, product_id: str, payload: Dict[str, Any]) -> ProductMessageResponse:
        """Replace a product."""
        product = self._service.update_product(product_id, payload)
        return ProductMessageResponse(message="Product updated successfully", product=product)

    def delete(self, product_id: str) -> ProductMessageResponse:
        """Delete a product."""
        product = self._service.delete_product(product_id)
        return ProductMessageResponse(message="Product deleted successfully", product=product)


@router.get("", response_model=ProductListResponse)
async def list_products(
    query: ProductQuery = Depends(get_product_query),
    service: CatalogService = Depends(get_service),
):
    """List products filtered by category, stock and search term, one page at a time."""
    controller = ProductController(service)
    return controller.list_products(query)


@router.get("/search", response_model=SearchResponse, responses=BAD_REQUEST)
async def search_products(
    q: Optional[str] = Query(None, description="Substring of name or description"),
    service: CatalogService = Depends(get_service),
):
    """Search products by name or description."""
    controller = ProductController(service)
    return controller.search(q)


@router.get("/stats", response_model=StatsResponse)
async def get_catalog_stats(service: CatalogService = Depends(get_service)):
    """Get catalog statistics."""
    controller = ProductController(service)
    return controller.get_stats()


@router.get("/{product_id}", response_model=Product, responses=NOT_FOUND)
async def get_product(product_id: str, service: CatalogService = Depends(get_service)):
    """Get a product by id."""
    controller = ProductController(service)
    return controller.get_product(product_id)


@router.post(
    "",
    status_code=201,
    response_model=ProductMessageResponse,
    dependencies=[Depends(require_api_key)],
    responses={**BAD_REQUEST, **UNAUTHORIZED},
)
async def create_product(
    payload: Dict[str, Any] = Depends(get_json_body),
    service: CatalogService = Depends(get_service),
):
    """Create a product. Requires x-api-key."""
    controller = ProductController(service)
    return controller.create(payload)


@router.put(
    "/{product_id}",
    response_model=ProductMessageResponse,
    dependencies=[Depends(require_api_key)],
    responses={**BAD_REQUEST, **UNAUTHORIZED, **NOT_FOUND},
)
async def update_product(
    product_id: str,
    payload: Dict[str, Any] = Depends(get_json_body),
    service: CatalogService = Depends(get_service),
):
    """Replace every field of a product. Requires x-api-key."""
    controller = ProductController(service)
    return controller.update(product_id, payload)


@router.delete(
    "/{product_id}",
    response_model=ProductMessageResponse,
    dependencies=[Depends(require_api_key)],
    responses={**UNAUTHORIZED, **NOT_FOUND},
)
async def delete_product(product_id: str, service: CatalogService = Depends(get_service)):
    """Delete a product. Requires x-api-key."""
    controller = ProductController(service)
    return controller.delete(product_id)
