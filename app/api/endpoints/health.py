"""
==============================================================================
Health Check Endpoints
==============================================================================

System health status endpoints for monitoring and orchestration.

==============================================================================
"""

from fastapi import APIRouter, Request


router = APIRouter(prefix="/health", tags=["Health"])


class HealthController:
    """Controller for health check operations."""

    def __init__(self, request: Request):
        self._state = request.app.state

    def check_catalog(self) -> dict:
        """Check catalog status."""
        service = getattr(self._state, "catalog_service", None)
        if service is not None:
            return {"status": "healthy", "products": len(service.catalog)}
        return {"status": "not_loaded", "products": 0}

    def get_health(self) -> dict:
        """Get full health status."""
        catalog_info = self.check_catalog()

        overall = "healthy" if catalog_info["status"] == "healthy" else "degraded"

        return {
            "status": overall,
            "components": {
                "api": "healthy",
                "catalog": catalog_info["status"]
            },
            "details": {
                "products_loaded": catalog_info["products"]
            }
        }


@router.get("")
async def health_check(request: Request):
    """
    Health check endpoint.

    Returns API and catalog status.
    """
    controller = HealthController(request)
    return controller.get_health()


@router.get("/ready")
async def readiness_check(request: Request):
    """Readiness probe: the catalog service is in place."""
    controller = HealthController(request)
    return {"ready": controller.check_catalog()["status"] == "healthy"}


@router.get("/live")
async def liveness_check():
    """Liveness probe for container orchestration."""
    return {"alive": True}
