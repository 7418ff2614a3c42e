"""Schemas package - request/response models for the agent service."""

from rag_agent.schemas.internal import (
    DocumentChunk,
    GenerationOutcome,
    GenerationSuccess,
    MalformedResponse,
    PluginResult,
    RetrievedChunk,
    TransportFailure,
)
from rag_agent.schemas.requests import (
    AgentMessageRequest,
    Content,
    GenerateContentRequest,
    GenerationConfig,
    Message,
    Part,
)
from rag_agent.schemas.responses import AgentMessageResponse, ErrorResponse

__all__ = [
    # Requests
    "AgentMessageRequest",
    "Message",
    "GenerateContentRequest",
    "GenerationConfig",
    "Content",
    "Part",
    # Responses
    "AgentMessageResponse",
    "ErrorResponse",
    # Internal
    "DocumentChunk",
    "RetrievedChunk",
    "PluginResult",
    "GenerationSuccess",
    "MalformedResponse",
    "TransportFailure",
    "GenerationOutcome",
]
