"""Internal DTOs used within the agent service."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class DocumentChunk(BaseModel):
    """A fixed-size slice of a source document, produced at ingestion time."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(..., description="Chunk text")
    source: str = Field(..., description="Name of the originating document")


class RetrievedChunk(BaseModel):
    """A chunk returned by a similarity query, with its score."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(default="", description="Chunk text")
    source: str = Field(default="unknown", description="Name of the originating document")
    score: float = Field(default=0.0, description="Similarity score")


class PluginResult(BaseModel):
    """Output of a plugin invoked for one request."""

    plugin: str = Field(..., description="Name of the plugin that ran")
    output: str = Field(..., description="Text returned by the plugin")


class GenerationSuccess(BaseModel):
    """The generation service returned text."""

    kind: Literal["success"] = "success"
    text: str


class MalformedResponse(BaseModel):
    """The generation service answered 2xx but without the expected text field."""

    kind: Literal["malformed"] = "malformed"
    body: dict | list | str | None = None


class TransportFailure(BaseModel):
    """The call failed on the wire or returned a non-2xx status.

    ``status_code`` is ``None`` when no HTTP response was received at all.
    """

    kind: Literal["transport_failure"] = "transport_failure"
    status_code: int | None = None
    body: str = ""


GenerationOutcome = Annotated[
    GenerationSuccess | MalformedResponse | TransportFailure,
    Field(discriminator="kind"),
]
