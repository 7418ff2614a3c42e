"""Response schemas for the agent API."""

from pydantic import BaseModel, Field


class AgentMessageResponse(BaseModel):
    """Successful response from ``POST /agent/message``."""

    response: str = Field(..., description="The generated (or fallback) answer")


class ErrorResponse(BaseModel):
    """Error response from the agent API."""

    error: str = Field(..., description="Error message")
