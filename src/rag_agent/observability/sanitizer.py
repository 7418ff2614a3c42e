"""Sensitive data sanitization for logging.

Recursively redacts sensitive fields from data structures before logging.
"""

import re
from typing import Any

from rag_agent.observability.constants import (
    REDACTED_VALUE,
    SENSITIVE_FIELD_PATTERNS,
    SENSITIVE_FIELDS,
)

# Matches ``key=<value>`` query parameters embedded in URLs or error strings
_KEY_PARAM_RE = re.compile(r"([?&]key=)[^&\s'\"]+")


def _is_sensitive_field(field_name: str) -> bool:
    field_lower = field_name.lower()

    if field_lower in SENSITIVE_FIELDS:
        return True

    return any(pattern in field_lower for pattern in SENSITIVE_FIELD_PATTERNS)


def redact_url_key(text: str) -> str:
    """Redact an API key passed as a ``key`` query parameter.

    Args:
        text: A URL or any text that may embed one (e.g. an httpx error).

    Returns:
        The text with the key value replaced.
    """
    return _KEY_PARAM_RE.sub(rf"\g<1>{REDACTED_VALUE}", text)


def sanitize(data: Any, max_depth: int = 10) -> Any:
    """Recursively sanitize sensitive data from a structure.

    Args:
        data: The data to sanitize (dict, list, or scalar).
        max_depth: Maximum recursion depth to prevent infinite loops.

    Returns:
        Sanitized copy of the data with sensitive fields redacted.
    """
    if max_depth <= 0:
        return REDACTED_VALUE

    if isinstance(data, dict):
        return {
            k: REDACTED_VALUE
            if isinstance(k, str) and _is_sensitive_field(k)
            else sanitize(v, max_depth - 1)
            for k, v in data.items()
        }

    if isinstance(data, list):
        return [sanitize(item, max_depth - 1) for item in data]

    if isinstance(data, tuple):
        return tuple(sanitize(item, max_depth - 1) for item in data)

    if isinstance(data, str):
        return redact_url_key(data)

    return data


def truncate_body(body: Any, max_length: int = 1000) -> Any:
    """Truncate a response body for logging."""
    if isinstance(body, str) and len(body) > max_length:
        return body[:max_length] + f"... [truncated, {len(body)} total chars]"

    if isinstance(body, dict):
        return {k: truncate_body(v, max_length) for k, v in body.items()}

    if isinstance(body, list):
        return [truncate_body(item, max_length) for item in body]

    return body
