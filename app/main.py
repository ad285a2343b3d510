"""
==============================================================================
Products API - Application Entry Point
==============================================================================

FastAPI application serving an in-memory product catalog with:
- CRUD endpoints (writes protected by a shared API key)
- Filtering, search and pagination
- Aggregate statistics

Usage:
------
    # Development
    uvicorn app.main:app --reload

    # Production
    uvicorn app.main:app --host 0.0.0.0 --port 3000

==============================================================================
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings, get_settings
from app.core.exceptions import register_exception_handlers
from app.core.middleware import RequestLoggingMiddleware
from app.api.router import api_router
from app.catalog.catalog import ProductCatalog, load_catalog
from app.schemas.common import MessageResponse
from app.services.catalog_service import CatalogService
from app.utils.validators import ProductValidator


# ============================================================================
# LOGGING SETUP
# ============================================================================

settings = get_settings()

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Hello World! Welcome to the Products API"


# ============================================================================
# APPLICATION FACTORY
# ============================================================================

class Application:
    """
    FastAPI application factory and manager.

    Settings and the catalog are passed in explicitly and stored on
    app.state, where the request dependencies read them.

    Handles:
    - Startup and shutdown logging
    - Middleware configuration
    - Router registration
    - Exception handler setup
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        catalog: Optional[ProductCatalog] = None
    ):
        """
        Initialize the application.

        Args:
            settings: Configuration (the global settings if None)
            catalog: Initial catalog (loaded from the seed file if None)
        """
        self._settings = settings or get_settings()
        self._validator = ProductValidator()
        self._catalog = catalog if catalog is not None else self._load_catalog()
        self._app = self._create_app()

    def _create_app(self) -> FastAPI:
        """Create and configure the FastAPI application."""
        app = FastAPI(
            title=self._settings.app_name,
            version="1.0.0",
            description="In-memory product catalog with search, pagination and statistics",
            lifespan=self._lifespan,
            docs_url="/docs",
            redoc_url="/redoc",
        )

        app.state.settings = self._settings
        app.state.catalog_service = CatalogService(self._catalog, self._validator)

        # Configure middleware
        self._configure_middleware(app)

        # Register exception handlers
        register_exception_handlers(app)

        # Register routers
        app.include_router(api_router)

        # Register root endpoint
        self._register_root(app)

        return app

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        """Application lifespan manager."""
        self._startup()
        yield
        self._shutdown()

    def _startup(self) -> None:
        """Application startup tasks."""
        logger.info("=" * 60)
        logger.info(f"🚀 Starting {self._settings.app_name}")
        logger.info(f"📦 Catalog holds {len(self._catalog)} products")
        logger.info(f"📍 Running on http://{self._settings.host}:{self._settings.port}")
        logger.info(
            f"🌐 API endpoints available at "
            f"http://{self._settings.host}:{self._settings.port}/api/products"
        )
        logger.info(f"📖 API Docs: http://{self._settings.host}:{self._settings.port}/docs")
        logger.info("=" * 60)

    def _shutdown(self) -> None:
        """Application shutdown tasks."""
        logger.info("🛑 Shutting down...")

    def _load_catalog(self) -> ProductCatalog:
        """Load the seed catalog when enabled."""
        if not self._settings.seed_catalog:
            return load_catalog(self._validator)
        return load_catalog(self._validator, self._settings.products_path)

    def _configure_middleware(self, app: FastAPI) -> None:
        """Configure application middleware."""
        app.add_middleware(RequestLoggingMiddleware)
        app.add_middleware(
            CORSMiddleware,
            allow_origins=self._settings.cors_origins_list,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    def _register_root(self, app: FastAPI) -> None:
        """Register root endpoint."""

        @app.get("/", response_model=MessageResponse)
        async def root():
            """Welcome message."""
            return MessageResponse(message=WELCOME_MESSAGE)

    @property
    def app(self) -> FastAPI:
        """Get the FastAPI application instance."""
        return self._app


# ============================================================================
# APPLICATION INSTANCE
# ============================================================================

application = Application(settings)
app = application.app


# ============================================================================
# ENTRY POINT
# ============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info"
    )
