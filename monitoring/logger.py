"""
Structured logging configuration for the storefront.
"""

import os
import sys
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional
import structlog


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    enable_json: Optional[bool] = None,
) -> None:
    """
    Configure structured logging for the storefront.

    Args:
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to a rotating log file; console only when unset
        enable_json: Render JSON lines instead of the console format
    """
    log_level = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()
    log_file = log_file or os.getenv("LOG_FILE_PATH")
    if enable_json is None:
        enable_json = os.getenv("LOG_JSON", "false").lower() in ("1", "true", "yes")
    level = getattr(logging, log_level, logging.INFO)

    handlers = [logging.StreamHandler(sys.stdout)]

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                log_file,
                maxBytes=int(os.getenv("LOG_MAX_BYTES", 10485760)),  # 10MB
                backupCount=int(os.getenv("LOG_BACKUP_COUNT", 5)),
            )
        )

    for handler in handlers:
        handler.setLevel(level)

    # uvicorn and the stdlib loggers share the same handlers
    root_logger = logging.getLogger()
    root_logger.handlers = handlers
    root_logger.setLevel(level)

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if enable_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Structured logger instance
    """
    return structlog.get_logger(name)


if not structlog.is_configured():
    setup_logging()
