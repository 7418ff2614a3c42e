"""Agent message endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from rag_agent.api.dependencies import get_orchestrator
from rag_agent.observability import LogEvents, get_logger
from rag_agent.schemas import AgentMessageRequest, AgentMessageResponse, ErrorResponse
from rag_agent.services import MessageValidationError, Orchestrator

logger = get_logger(__name__)

router = APIRouter(tags=["agent"])

MISSING_FIELDS_ERROR = "Both message and session_id are required"
INTERNAL_ERROR = "Internal server error"


def error_response(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=error).model_dump())


@router.post(
    "/message",
    response_model=AgentMessageResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing message or session_id"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)
async def post_message(
    request: AgentMessageRequest,
    orchestrator: Annotated[Orchestrator, Depends(get_orchestrator)],
) -> AgentMessageResponse | JSONResponse:
    """
    Answer a chat message using documents, session memory and plugins.

    **Request:**
    - `message`: The user's message
    - `session_id`: Identifier scoping conversational memory

    **Response:**
    - `response`: The generated answer. Downstream failures still return
      200 with a fallback answer.
    """
    if not request.message or not request.session_id:
        logger.info(LogEvents.MESSAGE_REJECTED, reason="missing fields")
        return error_response(400, MISSING_FIELDS_ERROR)

    try:
        response = await orchestrator.process_message(request.message, request.session_id)
    except MessageValidationError:
        return error_response(400, MISSING_FIELDS_ERROR)
    except Exception:
        logger.exception(LogEvents.MESSAGE_FAILED, session_id=request.session_id)
        return error_response(500, INTERNAL_ERROR)

    return AgentMessageResponse(response=response)
