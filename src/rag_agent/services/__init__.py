"""Services package - business logic for the agent workflow."""

from rag_agent.services.context_builder import ContextBuilder
from rag_agent.services.generation import GenerationService
from rag_agent.services.ingestion import IngestionError, IngestionService
from rag_agent.services.memory import SessionStore
from rag_agent.services.orchestrator import (
    MessageValidationError,
    Orchestrator,
    OrchestratorError,
)
from rag_agent.services.plugins import (
    IntentDetector,
    PluginError,
    PluginNotFoundError,
    PluginRegistry,
)
from rag_agent.services.retrieval import RetrievalError, RetrievalService

__all__ = [
    "ContextBuilder",
    "GenerationService",
    "IngestionError",
    "IngestionService",
    "IntentDetector",
    "MessageValidationError",
    "Orchestrator",
    "OrchestratorError",
    "PluginError",
    "PluginNotFoundError",
    "PluginRegistry",
    "RetrievalError",
    "RetrievalService",
    "SessionStore",
]
