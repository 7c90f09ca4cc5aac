"""
Error taxonomy for the CRM services

Handlers and the data-access layer raise these; the exception handlers
registered by register_error_handlers() turn them into JSON error bodies
of the form {"error": "<message>"}.
"""

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog

from crm.shared.utils.responses import error_response

logger = structlog.get_logger(__name__)


class ServiceError(Exception):
    """Base class for errors that map onto an HTTP status"""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequestError(ServiceError):
    """Malformed JSON or invalid fields"""

    status_code = 400
    default_message = "Bad request"


class NotFoundError(ServiceError):
    status_code = 404
    default_message = "Not found"


class MethodNotAllowedError(ServiceError):
    status_code = 405
    default_message = "Method not allowed"


class StorageError(ServiceError):
    """Any failure talking to the relational store"""

    status_code = 500
    default_message = "Database error"


class UpstreamUnavailableError(ServiceError):
    """A dependency could not be reached at the transport level"""

    status_code = 502
    default_message = "Upstream unavailable"


def register_error_handlers(app: FastAPI, unmatched_status: int = 405) -> None:
    """
    Install the JSON error handlers on an application.

    Args:
        app: FastAPI application
        unmatched_status: status returned for requests no route accepts.
            Backends answer 405 for anything they do not serve.
    """
    unmatched_message = (
        MethodNotAllowedError.default_message
        if unmatched_status == 405
        else NotFoundError.default_message
    )

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        if exc.status_code >= 500:
            logger.error(
                "Request failed",
                method=request.method,
                path=request.url.path,
                status_code=exc.status_code,
                error=exc.message,
            )
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def unmatched_route_handler(request: Request, exc: StarletteHTTPException):
        # Routing misses (404/405) collapse into a single status per service
        if exc.status_code in (404, 405):
            return error_response(unmatched_status, unmatched_message)
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def path_validation_handler(request: Request, exc: RequestValidationError):
        logger.warning("Invalid request parameters", path=request.url.path, errors=exc.errors())
        return error_response(400, "Invalid request parameters")

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler"""
        logger.error(
            "Unhandled exception",
            error=str(exc),
            method=request.method,
            url=str(request.url),
            exc_info=True,
        )
        return error_response(500, "Internal server error")
