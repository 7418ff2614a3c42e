"""Retrieval service - similarity search over ingested document chunks."""

import asyncio
import logging
import time

from rag_agent.clients.embedder import Embedder, EmbeddingError
from rag_agent.clients.vector_index import VectorIndexClient, VectorIndexError
from rag_agent.schemas.internal import RetrievedChunk

logger = logging.getLogger(__name__)


class RetrievalError(Exception):
    """Embedding or vector index failure during retrieval."""


class RetrievalService:
    """Embeds a query and returns the closest chunks from the index."""

    def __init__(self, embedder: Embedder, index_client: VectorIndexClient):
        self.embedder = embedder
        self.index_client = index_client

    async def relevant_chunks(self, query: str, top_k: int = 3) -> list[RetrievedChunk]:
        """
        Retrieve the chunks most similar to ``query``.

        Args:
            query: The user's message
            top_k: Maximum number of chunks to return (must be positive)

        Returns:
            Up to ``top_k`` chunks, highest score first. Fewer are returned
            when the index holds fewer matches.

        Raises:
            RetrievalError: If embedding or the index query fails
        """
        if top_k < 1:
            raise ValueError("top_k must be a positive integer")

        start_time = time.perf_counter()
        try:
            vector = await asyncio.to_thread(self.embedder.embed_query, query)
            matches = await asyncio.to_thread(self.index_client.query, vector, top_k)
        except (EmbeddingError, VectorIndexError) as e:
            raise RetrievalError(str(e)) from e

        chunks = [self._to_chunk(match) for match in matches]
        chunks.sort(key=lambda c: c.score, reverse=True)

        latency_ms = int((time.perf_counter() - start_time) * 1000)
        logger.info(f"Retrieval complete: {len(chunks)} chunks, {latency_ms}ms")
        return chunks[:top_k]

    @staticmethod
    def _to_chunk(match: dict) -> RetrievedChunk:
        metadata = match.get("metadata") or {}
        return RetrievedChunk(
            content=str(metadata.get("content") or ""),
            source=str(metadata.get("source") or "unknown"),
            score=float(match.get("score") or 0.0),
        )
