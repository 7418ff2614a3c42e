"""FastAPI dependencies for the agent API.

Clients and the session store are process-wide singletons (``lru_cache``);
the embedding model in particular is loaded once and shared read-only.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from rag_agent.clients import Embedder, GeminiClient, VectorIndexClient
from rag_agent.core.config import get_settings
from rag_agent.schemas import GenerationConfig
from rag_agent.services import (
    ContextBuilder,
    GenerationService,
    IngestionService,
    IntentDetector,
    Orchestrator,
    PluginRegistry,
    RetrievalService,
    SessionStore,
)
from rag_agent.services.plugins import DEFAULT_TRIGGERS, create_default_registry


@lru_cache
def get_session_store() -> SessionStore:
    """Get the session store singleton."""
    return SessionStore()


@lru_cache
def get_embedder() -> Embedder:
    """Get the embedding model singleton."""
    settings = get_settings()
    return Embedder(settings.embedding_model, dimension=settings.embedding_dimension)


@lru_cache
def get_vector_index_client() -> VectorIndexClient:
    """Get the vector index client singleton."""
    settings = get_settings()
    api_key = settings.pinecone_api_key.get_secret_value() if settings.pinecone_api_key else None
    return VectorIndexClient(
        api_key=api_key,
        index_name=settings.index_name,
        cloud=settings.pinecone_cloud,
        region=settings.pinecone_region,
    )


@lru_cache
def get_gemini_client() -> GeminiClient:
    """Get the generation client singleton."""
    settings = get_settings()
    api_key = settings.gemini_api_key.get_secret_value() if settings.gemini_api_key else None
    return GeminiClient(
        api_key=api_key,
        base_url=settings.gemini_api_url,
        model=settings.gemini_model,
        timeout=settings.generation_timeout,
        generation_config=GenerationConfig(
            temperature=settings.generation_temperature,
            top_p=settings.generation_top_p,
            max_output_tokens=settings.generation_max_output_tokens,
        ),
    )


@lru_cache
def get_plugin_registry() -> PluginRegistry:
    """Get the plugin registry with built-in plugins registered."""
    return create_default_registry()


def get_intent_detector() -> IntentDetector:
    """Get an intent detector over the built-in triggers."""
    return IntentDetector(DEFAULT_TRIGGERS)


def get_context_builder() -> ContextBuilder:
    """Get a context builder instance."""
    return ContextBuilder(max_context_chars=get_settings().max_context_chars)


def get_retrieval_service(
    embedder: Annotated[Embedder, Depends(get_embedder)],
    index_client: Annotated[VectorIndexClient, Depends(get_vector_index_client)],
) -> RetrievalService:
    """Get the retrieval service."""
    return RetrievalService(embedder, index_client)


def get_generation_service(
    client: Annotated[GeminiClient, Depends(get_gemini_client)],
) -> GenerationService:
    """Get the generation service."""
    return GenerationService(client)


def get_ingestion_service() -> IngestionService:
    """Get the ingestion service (used at startup and by the CLI)."""
    return IngestionService(get_embedder(), get_vector_index_client(), get_settings())


def get_orchestrator(
    session_store: Annotated[SessionStore, Depends(get_session_store)],
    retrieval_service: Annotated[RetrievalService, Depends(get_retrieval_service)],
    plugin_registry: Annotated[PluginRegistry, Depends(get_plugin_registry)],
    intent_detector: Annotated[IntentDetector, Depends(get_intent_detector)],
    context_builder: Annotated[ContextBuilder, Depends(get_context_builder)],
    generation_service: Annotated[GenerationService, Depends(get_generation_service)],
) -> Orchestrator:
    """Get the orchestrator service."""
    settings = get_settings()
    return Orchestrator(
        session_store=session_store,
        retrieval_service=retrieval_service,
        plugin_registry=plugin_registry,
        intent_detector=intent_detector,
        context_builder=context_builder,
        generation_service=generation_service,
        top_k=settings.retrieval_top_k,
        history_window=settings.history_window,
        retrieval_timeout=settings.retrieval_timeout,
        plugin_timeout=settings.plugin_timeout,
    )
