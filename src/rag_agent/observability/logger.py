"""Structured logging configuration using structlog.

Provides JSON-formatted logs with correlation ID and service name. Every
rendered entry passes through the sanitizer, so API keys that leak into
event fields (e.g. an httpx error quoting the Gemini URL) are redacted
before they reach stdout.
"""

import logging
import sys

import structlog
from structlog.typing import EventDict, Processor

from rag_agent.observability.constants import SERVICE_NAME
from rag_agent.observability.context import get_correlation_id
from rag_agent.observability.sanitizer import sanitize

# Loggers of libraries that are chatty at INFO
NOISY_LOGGERS = (
    "httpx",
    "httpcore",
    "uvicorn.access",
    "sentence_transformers",
    "pinecone",
)


def add_correlation_id(
    logger: logging.Logger,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: EventDict,
) -> EventDict:
    """Structlog processor to add correlation ID to log entries.

    Args:
        logger: The logger instance (unused but required by structlog).
        method_name: The log method name (unused but required by structlog).
        event_dict: The event dictionary being processed.

    Returns:
        The event dictionary with correlation_id added when one is bound.
    """
    correlation_id = get_correlation_id()
    if correlation_id:
        event_dict["correlation_id"] = correlation_id
    return event_dict


def add_service_name(
    logger: logging.Logger,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: EventDict,
) -> EventDict:
    """Structlog processor to add service name to log entries."""
    event_dict["service"] = SERVICE_NAME
    return event_dict


def redact_secrets(
    logger: logging.Logger,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: EventDict,
) -> EventDict:
    """Structlog processor that redacts sensitive fields and ``key=`` parameters.

    Runs after exception formatting so rendered tracebacks are covered too.
    """
    return sanitize(event_dict)


def build_processors(log_format: str = "json", development_mode: bool = False) -> list[Processor]:
    """Return the processor chain for the given output format.

    Args:
        log_format: Output format - "json" for production, "console" for development.
        development_mode: If True, uses colored console output.

    Returns:
        The processors, ending with the renderer.
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        add_service_name,
        add_correlation_id,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_format == "console" or development_mode:
        return [
            *shared_processors,
            redact_secrets,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    return [
        *shared_processors,
        structlog.processors.format_exc_info,
        redact_secrets,
        structlog.processors.JSONRenderer(),
    ]


def configure_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    development_mode: bool = False,
) -> None:
    """Configure structlog for the application.

    Args:
        log_level: The log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Output format - "json" for production, "console" for development.
        development_mode: If True, uses colored console output.
    """
    # Loggers are not cached so structlog.testing.capture_logs works after startup
    structlog.configure(
        processors=build_processors(log_format, development_mode),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    # The renderer produces the whole line; the root handler must not decorate it
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
        force=True,
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("agent.retrieval.completed", chunks=3)
    """
    return structlog.get_logger(name)
