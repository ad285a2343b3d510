"""
==============================================================================
Pytest Configuration and Fixtures
==============================================================================

Provides settings, catalog, service, client and header fixtures.

Every test gets a fresh application with its own catalog, so mutations
never leak between tests.

==============================================================================
"""

import pytest
from typing import Dict, Generator, List
from fastapi.testclient import TestClient

from app.config import Settings
from app.catalog.catalog import ProductCatalog
from app.main import Application
from app.services.catalog_service import CatalogService
from app.utils.validators import ProductValidator


TEST_API_KEY = "test-api-key"

SEED_RECORDS: List[Dict] = [
    {
        "name": "Gaming Laptop",
        "description": "High-performance laptop for gaming and productivity",
        "price": 1299.99,
        "category": "Electronics",
        "inStock": True,
    },
    {
        "name": "Smartphone Pro",
        "description": "Latest flagship smartphone with advanced camera",
        "price": 899.99,
        "category": "Electronics",
        "inStock": True,
    },
    {
        "name": "Coffee Maker",
        "description": "Automatic drip coffee maker with programmable timer",
        "price": 79.99,
        "category": "Kitchen",
        "inStock": False,
    },
    {
        "name": "Ergonomic Office Chair",
        "description": "Comfortable office chair with lumbar support",
        "price": 249.99,
        "category": "Furniture",
        "inStock": True,
    },
    {
        "name": "Wireless Mouse",
        "description": "Precision wireless mouse with long battery life",
        "price": 39.99,
        "category": "Electronics",
        "inStock": True,
    },
]


# ============================================================================
# CONFIGURATION FIXTURES
# ============================================================================

@pytest.fixture
def settings() -> Settings:
    """Settings with a known API key and no seed file."""
    return Settings(api_key=TEST_API_KEY, seed_catalog=False, debug=False)


# ============================================================================
# CATALOG FIXTURES
# ============================================================================

@pytest.fixture
def validator() -> ProductValidator:
    return ProductValidator()


@pytest.fixture
def catalog(validator: ProductValidator) -> ProductCatalog:
    """Catalog holding the five seed products."""
    return ProductCatalog.from_records(SEED_RECORDS, validator)


@pytest.fixture
def empty_catalog() -> ProductCatalog:
    return ProductCatalog()


@pytest.fixture
def service(catalog: ProductCatalog, validator: ProductValidator) -> CatalogService:
    return CatalogService(catalog, validator)


@pytest.fixture
def valid_payload() -> Dict:
    """A create payload with untrimmed text fields."""
    return {
        "name": "  Desk Lamp  ",
        "description": "  LED desk lamp with dimmer  ",
        "price": 45.5,
        "category": " Home ",
        "inStock": True,
    }


# ============================================================================
# CLIENT FIXTURES
# ============================================================================

@pytest.fixture
def application(settings: Settings, catalog: ProductCatalog) -> Application:
    return Application(settings=settings, catalog=catalog)


@pytest.fixture
def client(application: Application) -> Generator[TestClient, None, None]:
    """Test client over the seeded application."""
    with TestClient(application.app) as test_client:
        yield test_client


@pytest.fixture
def empty_client(settings: Settings, empty_catalog: ProductCatalog) -> Generator[TestClient, None, None]:
    """Test client over an application with an empty catalog."""
    with TestClient(Application(settings=settings, catalog=empty_catalog).app) as test_client:
        yield test_client


# ============================================================================
# HEADER FIXTURES
# ============================================================================

@pytest.fixture
def auth_headers() -> Dict[str, str]:
    """Headers carrying the valid API key."""
    return {"x-api-key": TEST_API_KEY}
