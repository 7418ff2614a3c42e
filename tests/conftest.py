"""Shared pytest fixtures for the RAG agent tests."""

import os

# Must be set before rag_agent imports: Settings() is cached on first use.
os.environ["INGEST_ON_STARTUP"] = "false"
os.environ["GEMINI_API_KEY"] = ""
os.environ["PINECONE_API_KEY"] = ""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from rag_agent.api.dependencies import get_orchestrator
from rag_agent.clients.gemini import GeminiClient
from rag_agent.main import app
from rag_agent.schemas.internal import GenerationSuccess
from rag_agent.services import (
    ContextBuilder,
    GenerationService,
    IntentDetector,
    Orchestrator,
    RetrievalService,
    SessionStore,
)
from rag_agent.services.plugins import DEFAULT_TRIGGERS, create_default_registry

MODEL_ANSWER = "Hello from the model"


@pytest.fixture
def session_store() -> SessionStore:
    return SessionStore()


@pytest.fixture
def retrieval_service():
    """A retrieval service that finds nothing unless a test says otherwise."""
    service = AsyncMock(spec=RetrievalService)
    service.relevant_chunks = AsyncMock(return_value=[])
    return service


@pytest.fixture
def gemini_client():
    """A generation client that always succeeds with MODEL_ANSWER."""
    client = AsyncMock(spec=GeminiClient)
    client.generate_content = AsyncMock(return_value=GenerationSuccess(text=MODEL_ANSWER))
    return client


@pytest.fixture
def orchestrator(session_store, retrieval_service, gemini_client) -> Orchestrator:
    return Orchestrator(
        session_store=session_store,
        retrieval_service=retrieval_service,
        plugin_registry=create_default_registry(),
        intent_detector=IntentDetector(DEFAULT_TRIGGERS),
        context_builder=ContextBuilder(),
        generation_service=GenerationService(gemini_client),
        top_k=3,
        history_window=2,
    )


@pytest.fixture
def client(orchestrator):
    """Test client wired to the fake-backed orchestrator."""
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
