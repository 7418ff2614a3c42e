"""Tests for the retrieval service."""

from unittest.mock import MagicMock

import pytest

from rag_agent.clients import Embedder, EmbeddingError, VectorIndexClient, VectorIndexError
from rag_agent.schemas import RetrievedChunk
from rag_agent.services import RetrievalError, RetrievalService


@pytest.fixture
def embedder():
    embedder = MagicMock(spec=Embedder)
    embedder.embed_query.return_value = [0.1, 0.2, 0.3]
    return embedder


@pytest.fixture
def index_client():
    client = MagicMock(spec=VectorIndexClient)
    client.query.return_value = []
    return client


@pytest.fixture
def retrieval_service(embedder, index_client) -> RetrievalService:
    return RetrievalService(embedder, index_client)


class TestRetrievalService:
    """Tests for relevant_chunks."""

    @pytest.mark.asyncio
    async def test_embeds_query_and_maps_matches(self, retrieval_service, embedder, index_client):
        """Test the embed-then-query pipeline."""
        index_client.query.return_value = [
            {"id": "doc-0", "score": 0.91, "metadata": {"content": "alpha", "source": "a.md"}},
            {"id": "doc-4", "score": 0.55, "metadata": {"content": "beta", "source": "b.txt"}},
        ]

        chunks = await retrieval_service.relevant_chunks("what is alpha?", top_k=3)

        embedder.embed_query.assert_called_once_with("what is alpha?")
        index_client.query.assert_called_once_with([0.1, 0.2, 0.3], 3)
        assert chunks == [
            RetrievedChunk(content="alpha", source="a.md", score=0.91),
            RetrievedChunk(content="beta", source="b.txt", score=0.55),
        ]

    @pytest.mark.asyncio
    async def test_missing_fields_get_defaults(self, retrieval_service, index_client):
        """Test defaults for missing score, source and content."""
        index_client.query.return_value = [{"id": "doc-1", "score": None, "metadata": {}}]

        chunks = await retrieval_service.relevant_chunks("q", top_k=3)

        assert chunks == [RetrievedChunk(content="", source="unknown", score=0.0)]

    @pytest.mark.asyncio
    async def test_results_sorted_by_score(self, retrieval_service, index_client):
        """Test descending-score ordering."""
        index_client.query.return_value = [
            {"score": 0.2, "metadata": {"content": "low"}},
            {"score": 0.8, "metadata": {"content": "high"}},
            {"score": 0.5, "metadata": {"content": "mid"}},
        ]

        chunks = await retrieval_service.relevant_chunks("q", top_k=3)

        assert [c.content for c in chunks] == ["high", "mid", "low"]

    @pytest.mark.asyncio
    async def test_fewer_matches_than_top_k(self, retrieval_service, index_client):
        """Test that a small index returns what it has without padding."""
        index_client.query.return_value = [{"score": 0.7, "metadata": {"content": "only"}}]

        chunks = await retrieval_service.relevant_chunks("q", top_k=3)

        assert len(chunks) == 1

    @pytest.mark.asyncio
    async def test_empty_index(self, retrieval_service):
        """Test an index with no matches."""
        assert await retrieval_service.relevant_chunks("q", top_k=3) == []

    @pytest.mark.asyncio
    async def test_index_failure_raises_retrieval_error(self, retrieval_service, index_client):
        """Test that vector index errors surface as RetrievalError."""
        index_client.query.side_effect = VectorIndexError("Query failed: 503")

        with pytest.raises(RetrievalError):
            await retrieval_service.relevant_chunks("q", top_k=3)

    @pytest.mark.asyncio
    async def test_embedding_failure_raises_retrieval_error(self, retrieval_service, embedder):
        """Test that embedding errors surface as RetrievalError."""
        embedder.embed_query.side_effect = EmbeddingError("model missing")

        with pytest.raises(RetrievalError):
            await retrieval_service.relevant_chunks("q", top_k=3)

    @pytest.mark.asyncio
    async def test_top_k_must_be_positive(self, retrieval_service):
        """Test validation of top_k."""
        with pytest.raises(ValueError):
            await retrieval_service.relevant_chunks("q", top_k=0)
