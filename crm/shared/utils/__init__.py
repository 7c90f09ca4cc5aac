"""
Shared utilities for the CRM services

This package contains common utilities used across all services.
"""

from .database import Database
from .errors import (
    BadRequestError,
    MethodNotAllowedError,
    NotFoundError,
    ServiceError,
    StorageError,
    UpstreamUnavailableError,
    register_error_handlers,
)
from .logger import setup_logging
from .middleware import install_request_logging
from .responses import empty_response, error_response, json_response
from .timing import ServerTiming

__all__ = [
    "Database",
    "ServiceError",
    "BadRequestError",
    "NotFoundError",
    "MethodNotAllowedError",
    "StorageError",
    "UpstreamUnavailableError",
    "register_error_handlers",
    "setup_logging",
    "install_request_logging",
    "json_response",
    "error_response",
    "empty_response",
    "ServerTiming",
]
