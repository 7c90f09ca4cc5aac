"""
Gateway - Main Application
Routes /customers and /orders to their services and serves /compute
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import httpx
from fastapi import FastAPI
import structlog
import uvicorn

from crm.gateway.config import GatewaySettings
from crm.gateway.routes import compute, proxy
from crm.gateway.utils.proxy import ServiceRouter
from crm.shared.routes import health
from crm.shared.utils.errors import register_error_handlers
from crm.shared.utils.http_client import UpstreamClient
from crm.shared.utils.logger import setup_logging
from crm.shared.utils.middleware import install_request_logging

logger = structlog.get_logger(__name__)


def build_service_router(
    settings: GatewaySettings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ServiceRouter:
    """Prefix table in match order: customers, then orders"""
    return ServiceRouter([
        ("/customers", UpstreamClient(settings.customer_service_url, settings, transport=transport)),
        ("/orders", UpstreamClient(settings.order_service_url, settings, transport=transport)),
    ])


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events"""
    settings: GatewaySettings = app.state.settings
    logger.info(
        "Starting Gateway",
        port=settings.port,
        customer_service_url=settings.customer_service_url,
        order_service_url=settings.order_service_url,
    )

    await app.state.service_router.start()

    yield

    await app.state.service_router.stop()
    logger.info("Gateway shutdown complete")


def create_app(settings: Optional[GatewaySettings] = None) -> FastAPI:
    """Build the gateway application around one settings object"""
    settings = settings or GatewaySettings()
    setup_logging(settings.log_level, settings.log_format)

    app = FastAPI(
        title="CRM - Gateway",
        description="Routes requests to the customer and order services",
        version="1.0.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.service_router = build_service_router(settings)

    install_request_logging(app)
    register_error_handlers(app, unmatched_status=404)

    app.include_router(health.router, tags=["Health"])
    app.include_router(compute.router, tags=["Compute"])
    # Catch-all for every method; must stay last
    app.add_route("/{path:path}", proxy.ProxyEndpoint(), include_in_schema=False)

    return app


app = create_app()


def run():
    """Console entry point"""
    settings: GatewaySettings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
