"""Client for the Gemini ``generateContent`` endpoint.

Every call returns a tagged outcome instead of raising, so callers decide
how each failure is presented to the user.
"""

import logging
import time
from typing import Any

import httpx

from rag_agent.observability.sanitizer import redact_url_key, sanitize, truncate_body
from rag_agent.schemas.internal import (
    GenerationOutcome,
    GenerationSuccess,
    MalformedResponse,
    TransportFailure,
)
from rag_agent.schemas.requests import (
    Content,
    GenerateContentRequest,
    GenerationConfig,
    Part,
)

logger = logging.getLogger(__name__)


class GeminiClient:
    """Client for calling a Gemini model over HTTP."""

    def __init__(
        self,
        api_key: str | None,
        base_url: str,
        model: str,
        timeout: float = 60.0,
        generation_config: GenerationConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = httpx.Timeout(timeout)
        self.generation_config = generation_config or GenerationConfig()
        self._transport = transport

    @property
    def endpoint_url(self) -> str:
        return f"{self.base_url}/{self.model}:generateContent"

    def build_request(
        self, system_prompt: str, context: str, question: str
    ) -> GenerateContentRequest:
        """Instruction and context go in the first part, the question in the second."""
        return GenerateContentRequest(
            contents=[
                Content(
                    parts=[
                        Part(text=f"{system_prompt}\n\n{context}"),
                        Part(text=f"Question: {question}"),
                    ]
                )
            ],
            generation_config=self.generation_config,
        )

    async def generate_content(
        self,
        system_prompt: str,
        context: str,
        question: str,
    ) -> GenerationOutcome:
        """
        Send one generation request.

        Args:
            system_prompt: Fixed assistant instruction
            context: Assembled context block (may be empty)
            question: The raw user message

        Returns:
            GenerationSuccess, MalformedResponse or TransportFailure
        """
        if not self.api_key:
            logger.error("Gemini API key is not configured")
            return TransportFailure(status_code=None, body="API key not configured")

        start_time = time.perf_counter()
        request_data = self.build_request(system_prompt, context, question)

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.post(
                    self.endpoint_url,
                    params={"key": self.api_key},
                    json=request_data.model_dump(by_alias=True),
                    headers={"Content-Type": "application/json"},
                )
            except httpx.TimeoutException:
                logger.error("Gemini request timed out")
                return TransportFailure(status_code=None, body="Request timed out")
            except httpx.RequestError as e:
                detail = redact_url_key(str(e))
                logger.error(f"Gemini request failed: {detail}")
                return TransportFailure(status_code=None, body=detail)

        latency_ms = int((time.perf_counter() - start_time) * 1000)

        if not response.is_success:
            body = truncate_body(response.text, 500)
            logger.error(f"Gemini API error: HTTP {response.status_code} - {body}")
            return TransportFailure(status_code=response.status_code, body=body)

        try:
            data = response.json()
        except ValueError:
            logger.error("Gemini returned a non-JSON body")
            return MalformedResponse(body=truncate_body(response.text, 500))

        text = self._extract_text(data)
        if not text:
            logger.error(f"Unexpected Gemini response format: {sanitize(truncate_body(data, 500))}")
            return MalformedResponse(body=data)

        logger.info(f"Gemini generation success: latency={latency_ms}ms")
        return GenerationSuccess(text=text)

    def _extract_text(self, data: Any) -> str | None:
        """Pull ``candidates[0].content.parts[0].text`` out of a response."""
        if not isinstance(data, dict):
            return None

        candidates = data.get("candidates")
        if not isinstance(candidates, list) or not candidates:
            return None

        content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
        if not isinstance(content, dict):
            return None

        parts = content.get("parts")
        if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
            return None

        text = parts[0].get("text")
        return text if isinstance(text, str) else None
