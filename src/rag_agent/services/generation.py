"""Generation service - turns generation outcomes into user-facing text."""

import logging

from rag_agent.clients.gemini import GeminiClient
from rag_agent.schemas.internal import (
    GenerationOutcome,
    GenerationSuccess,
    MalformedResponse,
    TransportFailure,
)

logger = logging.getLogger(__name__)

SERVICE_ERROR_FALLBACK = "Sorry, I'm having trouble generating a response right now."
UNEXPECTED_FORMAT_FALLBACK = "I received an unexpected response format from the AI service."
REQUEST_FAILED_FALLBACK = "Sorry, I encountered an error while generating a response."


def fallback_for(outcome: GenerationOutcome) -> str | None:
    """Return the fallback text for a failed outcome, or None on success."""
    if isinstance(outcome, GenerationSuccess):
        return None
    if isinstance(outcome, MalformedResponse):
        return UNEXPECTED_FORMAT_FALLBACK
    if isinstance(outcome, TransportFailure) and outcome.status_code is not None:
        return SERVICE_ERROR_FALLBACK
    return REQUEST_FAILED_FALLBACK


class GenerationService:
    """Always produces an answer string; failures become fallback messages."""

    def __init__(self, client: GeminiClient):
        self.client = client

    async def generate(self, system_prompt: str, context: str, question: str) -> str:
        """
        Generate an answer for ``question``.

        Never raises for service failures. Returns the generated text, or
        one of the fallback strings describing what went wrong.
        """
        try:
            outcome = await self.client.generate_content(
                system_prompt=system_prompt, context=context, question=question
            )
        except Exception:
            logger.exception("Generation client raised unexpectedly")
            return REQUEST_FAILED_FALLBACK

        fallback = fallback_for(outcome)
        if fallback is not None:
            logger.warning(f"Generation fell back: kind={outcome.kind}")
            return fallback

        return outcome.text
