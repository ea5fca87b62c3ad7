"""FastAPI application entry point.

The composition root: settings → endpoint registry → query gateway (optionally
wrapped with retries) → routers. Endpoint definitions are loaded before the
application accepts traffic.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from sparql_gateway.config.endpoints import build_registry
from sparql_gateway.config.settings import GatewaySettings
from sparql_gateway.logging_config import configure_logging
from sparql_gateway.middleware.error_handler import register_error_handlers
from sparql_gateway.middleware.request_id import RequestIdMiddleware
from sparql_gateway.routers.health import create_health_router
from sparql_gateway.routers.query import create_query_router
from sparql_gateway.services.query_gateway import QueryGateway
from sparql_gateway.services.retry import RetryingQueryGateway

logger = logging.getLogger(__name__)


def create_app(
    settings: GatewaySettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    ``transport`` is handed to the gateway's HTTP client; tests pass an
    ``httpx.MockTransport`` to stand in for remote endpoints.
    """
    settings = settings or GatewaySettings()

    registry = build_registry(settings)
    gateway = QueryGateway(
        registry,
        user_agent=settings.user_agent,
        transport=transport,
    )
    executor: QueryGateway | RetryingQueryGateway = gateway
    if settings.query_max_retries > 0:
        executor = RetryingQueryGateway(
            gateway,
            max_retries=settings.query_max_retries,
            backoff_seconds=settings.query_retry_backoff_seconds,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.log_level)
        logger.info(
            "Starting SPARQL gateway on port %d with %d endpoint(s)",
            settings.port,
            len(registry),
        )
        yield
        logger.info("SPARQL gateway shut down")

    app = FastAPI(
        title="SPARQL Query Gateway",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.registry = registry
    app.state.gateway = executor

    register_error_handlers(app)
    app.add_middleware(RequestIdMiddleware)

    app.include_router(create_health_router(registry=registry))
    app.include_router(create_query_router(gateway=executor))

    return app


app = create_app()
