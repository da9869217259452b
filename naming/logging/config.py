"""
Unified Logging Configuration

Applications embedding the naming client call configure_logging() once;
library modules only ever call get_logger().
"""
import structlog
import logging
import sys
from typing import Optional

from naming.config.settings import NamingSettings, get_settings


def configure_logging(
    log_level: Optional[str] = None,
    json_format: Optional[bool] = None,
    settings: Optional[NamingSettings] = None
) -> None:
    """
    Configure structured logging for the naming client.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR), defaults to LOG_LEVEL
        json_format: Use JSON format (for production) vs colored console (dev),
            defaults to LOG_JSON
        settings: Settings to read defaults from
    """
    settings = settings or get_settings()
    log_level = log_level or settings.LOG_LEVEL
    if json_format is None:
        json_format = settings.LOG_JSON

    level = getattr(logging, log_level.upper(), logging.INFO)

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_format:
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer()
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True)
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    # Silence noisy third-party loggers
    for logger_name in ("httpcore", "httpx"):
        logging.getLogger(logger_name).setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a logger with the given name"""
    return structlog.get_logger(name)
