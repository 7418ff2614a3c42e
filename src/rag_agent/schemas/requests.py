"""Request schemas for the agent API and the generation service."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class AgentMessageRequest(BaseModel):
    """Body of ``POST /agent/message``.

    Both fields are optional at the schema level so the endpoint can return
    its own 400 error body instead of FastAPI's 422 validation payload.
    """

    message: str | None = Field(default=None, description="The user's chat message")
    session_id: str | None = Field(
        default=None,
        description="Caller-supplied identifier scoping conversational memory",
    )


class Message(BaseModel):
    """A single role-tagged message held in session memory."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    content: str


class Part(BaseModel):
    """A text part of a generateContent request."""

    text: str


class Content(BaseModel):
    """A content block of a generateContent request."""

    parts: list[Part]


class GenerationConfig(BaseModel):
    """Sampling parameters for the generation service."""

    temperature: float = 0.3
    top_p: float = Field(default=0.95, serialization_alias="topP")
    max_output_tokens: int = Field(default=1024, serialization_alias="maxOutputTokens")


class GenerateContentRequest(BaseModel):
    """Request body for the Gemini ``generateContent`` endpoint."""

    contents: list[Content]
    generation_config: GenerationConfig = Field(
        default_factory=GenerationConfig,
        serialization_alias="generationConfig",
    )
