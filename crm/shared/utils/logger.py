"""
Logging utilities for the CRM services

Configures structlog on top of the stdlib logging module so that every
service emits the same key/value records.
"""

import logging
import sys

import structlog


LOG_FORMATS = ("json", "console")


def setup_logging(log_level: str = "INFO", log_format: str = "json") -> None:
    """
    Setup logging configuration

    Args:
        log_level: Root log level name ('DEBUG', 'INFO', ...)
        log_format: 'json' for machine-readable output, 'console' for local development
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    if log_format not in LOG_FORMATS:
        log_format = "json"

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
        force=True,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
