"""Observability layer for the RAG agent.

Structured logging, request tracing via correlation IDs, and redaction
of secrets before they reach the logs.

Usage:
    from rag_agent.observability import get_logger

    logger = get_logger(__name__)
    logger.info("agent.message.received", session_id=session_id)
"""

from rag_agent.observability.constants import LogEvents
from rag_agent.observability.context import get_correlation_id, set_correlation_id
from rag_agent.observability.logger import configure_logging, get_logger
from rag_agent.observability.middleware import (
    CorrelationIDMiddleware,
    RequestLoggingMiddleware,
)
from rag_agent.observability.sanitizer import redact_url_key, sanitize

__all__ = [
    "LogEvents",
    # Context
    "get_correlation_id",
    "set_correlation_id",
    # Logger
    "configure_logging",
    "get_logger",
    # Middleware
    "CorrelationIDMiddleware",
    "RequestLoggingMiddleware",
    # Sanitizer
    "redact_url_key",
    "sanitize",
]
