"""Tests for the generation service fallback mapping."""

from unittest.mock import AsyncMock

import pytest

from rag_agent.clients.gemini import GeminiClient
from rag_agent.schemas import GenerationSuccess, MalformedResponse, TransportFailure
from rag_agent.services import GenerationService
from rag_agent.services.generation import (
    REQUEST_FAILED_FALLBACK,
    SERVICE_ERROR_FALLBACK,
    UNEXPECTED_FORMAT_FALLBACK,
    fallback_for,
)


def _service(outcome=None, side_effect=None) -> GenerationService:
    client = AsyncMock(spec=GeminiClient)
    client.generate_content = AsyncMock(return_value=outcome, side_effect=side_effect)
    return GenerationService(client)


@pytest.mark.asyncio
async def test_success_returns_text() -> None:
    """Test that generated text is returned unchanged."""
    service = _service(GenerationSuccess(text="The answer"))
    assert await service.generate("sys", "ctx", "q") == "The answer"
    service.client.generate_content.assert_awaited_once_with(
        system_prompt="sys", context="ctx", question="q"
    )


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("outcome", "expected"),
    [
        (TransportFailure(status_code=503, body="unavailable"), SERVICE_ERROR_FALLBACK),
        (TransportFailure(status_code=None, body="connection refused"), REQUEST_FAILED_FALLBACK),
        (MalformedResponse(body={"candidates": []}), UNEXPECTED_FORMAT_FALLBACK),
    ],
)
async def test_failures_become_fallbacks(outcome, expected) -> None:
    """Test each failure variant maps to its own fallback string."""
    assert await _service(outcome).generate("sys", "ctx", "q") == expected


@pytest.mark.asyncio
async def test_client_exception_becomes_fallback() -> None:
    """Test that an unexpected client error still yields an answer."""
    service = _service(side_effect=RuntimeError("boom"))
    assert await service.generate("sys", "ctx", "q") == REQUEST_FAILED_FALLBACK


def test_fallbacks_are_distinct_and_non_empty() -> None:
    """Test that service errors and format errors can be told apart."""
    fallbacks = {SERVICE_ERROR_FALLBACK, UNEXPECTED_FORMAT_FALLBACK, REQUEST_FAILED_FALLBACK}
    assert len(fallbacks) == 3
    assert all(fallbacks)
    assert fallback_for(GenerationSuccess(text="ok")) is None
