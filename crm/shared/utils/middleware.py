"""
HTTP middleware shared by the CRM services
"""

import time

from fastapi import FastAPI, Request
import structlog

logger = structlog.get_logger(__name__)


def install_request_logging(app: FastAPI) -> None:
    """Log every request on arrival and on completion"""

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started_at = time.perf_counter()
        logger.debug(
            "Request received",
            method=request.method,
            path=request.url.path,
            client_ip=request.client.host if request.client else "unknown",
        )

        response = await call_next(request)

        logger.info(
            "Request completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started_at) * 1000.0, 3),
        )
        return response
