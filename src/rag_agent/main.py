"""Main FastAPI application for the RAG agent service."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from rag_agent.api import api_router, health_router
from rag_agent.api.dependencies import get_ingestion_service
from rag_agent.api.endpoints.message import (
    INTERNAL_ERROR,
    MISSING_FIELDS_ERROR,
    error_response,
)
from rag_agent.core.config import get_settings
from rag_agent.observability import (
    CorrelationIDMiddleware,
    LogEvents,
    RequestLoggingMiddleware,
    configure_logging,
    get_logger,
)
from rag_agent.services import IngestionError

logger = get_logger(__name__)


async def run_startup_ingestion() -> int:
    """Populate the vector index before serving; failures only degrade retrieval."""
    settings = get_settings()
    if not settings.ingest_on_startup:
        logger.info(LogEvents.INGESTION_SKIPPED, reason="disabled")
        return 0
    if not settings.vector_index_configured:
        logger.warning(LogEvents.INGESTION_SKIPPED, reason="PINECONE_API_KEY not set")
        return 0

    try:
        return await get_ingestion_service().ingest()
    except IngestionError:
        logger.exception(LogEvents.INGESTION_FAILED)
        return 0


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Application lifespan manager."""
    settings = get_settings()
    configure_logging(
        log_level=settings.log_level,
        log_format=settings.log_format,
        development_mode=settings.debug,
    )
    logger.info(
        "service.starting",
        service=settings.service_name,
        generation_configured=settings.generation_configured,
        vector_index_configured=settings.vector_index_configured,
    )

    await run_startup_ingestion()

    logger.info(
        "service.ready",
        url=f"http://{settings.host}:{settings.port}",
        endpoint="POST /agent/message",
    )

    yield

    logger.info("service.stopping", service=settings.service_name)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed agent message bodies get the same 400 as missing fields."""
    if request.url.path.startswith("/agent/"):
        logger.info(LogEvents.MESSAGE_REJECTED, reason="invalid body")
        return error_response(400, MISSING_FIELDS_ERROR)
    return await request_validation_exception_handler(request, exc)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        LogEvents.REQUEST_FAILED,
        path=request.url.path,
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return error_response(500, INTERNAL_ERROR)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="RAG Agent",
        description="""
Chat agent that answers with retrieval-augmented generation.

## Workflow

1. Client sends a message and a session id
2. The agent retrieves relevant document chunks and, if the message asks
   for one, runs a plugin (in parallel)
3. Recent conversation history is added
4. The combined context and question are sent to the language model
5. The exchange is recorded in session memory and the answer returned
        """,
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(health_router)  # /health, /ready
    app.include_router(api_router)  # /agent/message

    return app


# Create the app instance
app = create_app()


def run() -> None:
    """Run the service with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "rag_agent.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
