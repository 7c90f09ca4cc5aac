"""
Order Service - Main Application
Handles order records; creation is gated on the customer service
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
import structlog
import uvicorn

from crm.order_service.config import OrderServiceSettings
from crm.order_service.routes import orders
from crm.order_service.utils.customer_client import CustomerServiceClient
from crm.order_service.utils.database import OrderDatabase
from crm.shared.routes import health
from crm.shared.utils.errors import register_error_handlers
from crm.shared.utils.logger import setup_logging
from crm.shared.utils.middleware import install_request_logging

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events"""
    settings: OrderServiceSettings = app.state.settings
    logger.info(
        "Starting Order Service",
        port=settings.port,
        customer_service_url=settings.customer_service_url,
    )

    db = OrderDatabase(settings)
    await db.initialize()
    app.state.db = db

    await app.state.customer_client.start()

    yield

    await app.state.customer_client.stop()
    await app.state.db.close()
    logger.info("Order Service shutdown complete")


def create_app(settings: Optional[OrderServiceSettings] = None) -> FastAPI:
    """Build the order service application around one settings object"""
    settings = settings or OrderServiceSettings()
    setup_logging(settings.log_level, settings.log_format)

    app = FastAPI(
        title="CRM - Order Service",
        description="Creates, reads and lists orders for verified customers",
        version="1.0.0",
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.settings = settings
    app.state.customer_client = CustomerServiceClient(settings)

    install_request_logging(app)
    register_error_handlers(app, unmatched_status=405)

    app.include_router(health.router, tags=["Health"])
    app.include_router(orders.router, prefix="/orders", tags=["Orders"])

    return app


app = create_app()


def run():
    """Console entry point"""
    settings: OrderServiceSettings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
