"""Clients package - external collaborators (embedding model, vector index, LLM)."""

from rag_agent.clients.embedder import Embedder, EmbeddingError
from rag_agent.clients.gemini import GeminiClient
from rag_agent.clients.vector_index import VectorIndexClient, VectorIndexError

__all__ = [
    "Embedder",
    "EmbeddingError",
    "GeminiClient",
    "VectorIndexClient",
    "VectorIndexError",
]
