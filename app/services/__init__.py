"""
==============================================================================
Services Package - Business Logic Layer
==============================================================================

Service classes implementing business logic.

This package provides:
- CatalogService: Product CRUD, listing pipeline, search and statistics

Architecture Pattern: Service Layer
----------------------------------
    ┌─────────────────┐
    │   API Router    │
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │ CatalogService  │  ← Business Logic
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │ ProductCatalog  │  ← In-memory store
    └─────────────────┘

Usage:
------
    from app.services import CatalogService

    service = CatalogService(catalog)
    page = service.list_products(ProductQuery(category="Electronics"))

==============================================================================
"""

from .catalog_service import CatalogService

__all__ = [
    "CatalogService",
]
