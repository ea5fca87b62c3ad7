"""Health and readiness endpoints.

- GET /health — service status + registered endpoint count
- GET /readiness — 200 only when at least one endpoint is registered
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Response

from sparql_gateway.models.responses import ApiResponse

if TYPE_CHECKING:
    from sparql_gateway.services.endpoint_registry import EndpointRegistry


def create_health_router(*, registry: EndpointRegistry | None = None) -> APIRouter:
    """Factory that creates the health router with injected dependencies."""

    health_router = APIRouter(tags=["health"])

    @health_router.get("/health")
    async def health() -> dict:
        return ApiResponse(
            success=True,
            data={
                "status": "healthy",
                "endpoints": len(registry) if registry is not None else 0,
            },
        ).model_dump()

    @health_router.get("/readiness")
    async def readiness(response: Response) -> dict:
        """Readiness probe — 200 iff the registry holds at least one endpoint."""
        endpoint_count = len(registry) if registry is not None else 0
        is_ready = endpoint_count > 0

        if not is_ready:
            response.status_code = 503

        return ApiResponse(
            success=is_ready,
            data={"ready": is_ready, "endpoints": endpoint_count},
            error=None if is_ready else "No SPARQL endpoints configured",
        ).model_dump()

    return health_router
