"""
==============================================================================
FastAPI Dependencies Module
==============================================================================

Dependency injection for the product endpoints.

This module implements:
- Service and settings lookup from application state
- API key enforcement for write routes
- JSON body reading for create and update
- Listing query parsing

Dependency Hierarchy:
--------------------
    ┌─────────────────┐        ┌─────────────────┐
    │  get_settings   │        │  get_service    │
    └────────┬────────┘        └─────────────────┘
             │
    ┌────────▼────────┐
    │ require_api_key │  ← runs before the body is read
    └─────────────────┘

Usage Examples:
--------------
    @router.post("", dependencies=[Depends(require_api_key)])
    def create(payload: dict = Depends(get_json_body),
               service: CatalogService = Depends(get_service)):
        ...

==============================================================================
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from fastapi import Depends, Query, Request
from fastapi.security import APIKeyHeader

from app.config import Settings
from app.core import exceptions
from app.core.security import API_KEY_HEADER, APIKeyVerifier
from app.schemas.product import ProductQuery
from app.services.catalog_service import CatalogService


# Module logger
logger = logging.getLogger(__name__)

# API key security scheme for Swagger UI
api_key_scheme = APIKeyHeader(name=API_KEY_HEADER, auto_error=False)


# =============================================================================
# APPLICATION STATE
# =============================================================================

def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings


def get_service(request: Request) -> CatalogService:
    """
    Catalog service of the running application.

    Raises:
        AppException: InternalServerError if the catalog was never loaded
    """
    service = getattr(request.app.state, "catalog_service", None)
    if service is None:
        raise exceptions.catalog_not_loaded()
    return service


# =============================================================================
# AUTHENTICATION
# =============================================================================

async def require_api_key(
    api_key: Optional[str] = Depends(api_key_scheme),
    settings: Settings = Depends(get_app_settings),
) -> None:
    """
    Require a valid x-api-key header.

    Raises:
        AppException: AuthenticationError if missing or wrong
    """
    APIKeyVerifier.from_settings(settings).verify(api_key)


# =============================================================================
# REQUEST BODY
# =============================================================================

async def get_json_body(request: Request) -> Dict[str, Any]:
    """
    Read the request body as a JSON object.

    An empty body and non-object JSON both give an empty mapping, so
    every validation rule is reported.

    Raises:
        AppException: ValidationError if the body is not valid JSON
    """
    raw = await request.body()
    if not raw.strip():
        return {}

    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.debug(f"Malformed JSON body on {request.method} {request.url.path}")
        raise exceptions.invalid_body()

    if not isinstance(payload, dict):
        return {}
    return payload


# =============================================================================
# LISTING QUERY
# =============================================================================

def get_product_query(
    category: Optional[str] = Query(None, description="Exact category, case-insensitive"),
    in_stock: Optional[str] = Query(None, alias="inStock", description='"true" for in stock'),
    search: Optional[str] = Query(None, description="Substring of name, description or category"),
    page: Optional[str] = Query(None, description="Page number (1-indexed, default 1)"),
    limit: Optional[str] = Query(None, description="Items per page (default 10)"),
) -> ProductQuery:
    """
    FastAPI dependency for listing parameters.

    page and limit are read as strings so non-numeric input falls back
    to the defaults instead of failing the request.
    """
    return ProductQuery.from_params(
        category=category,
        in_stock=in_stock,
        search=search,
        page=page,
        limit=limit,
    )
