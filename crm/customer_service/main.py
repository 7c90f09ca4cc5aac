"""
Customer Service - Main Application
Handles customer records backed by PostgreSQL
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
import structlog
import uvicorn

from crm.customer_service.config import CustomerServiceSettings
from crm.customer_service.routes import customers
from crm.customer_service.utils.database import CustomerDatabase
from crm.shared.routes import health
from crm.shared.utils.errors import register_error_handlers
from crm.shared.utils.logger import setup_logging
from crm.shared.utils.middleware import install_request_logging

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events"""
    settings: CustomerServiceSettings = app.state.settings
    logger.info("Starting Customer Service", port=settings.port)

    db = CustomerDatabase(settings)
    await db.initialize()
    app.state.db = db

    yield

    await app.state.db.close()
    logger.info("Customer Service shutdown complete")


def create_app(settings: Optional[CustomerServiceSettings] = None) -> FastAPI:
    """Build the customer service application around one settings object"""
    settings = settings or CustomerServiceSettings()
    setup_logging(settings.log_level, settings.log_format)

    app = FastAPI(
        title="CRM - Customer Service",
        description="Creates, reads, lists and deletes customers",
        version="1.0.0",
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.settings = settings

    install_request_logging(app)
    register_error_handlers(app, unmatched_status=405)

    app.include_router(health.router, tags=["Health"])
    app.include_router(customers.router, prefix="/customers", tags=["Customers"])

    return app


app = create_app()


def run():
    """Console entry point"""
    settings: CustomerServiceSettings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
