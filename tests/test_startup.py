"""Tests for ingestion at application startup."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from rag_agent.clients import Embedder, VectorIndexClient
from rag_agent.core.config import Settings
from rag_agent.main import run_startup_ingestion
from rag_agent.services import IngestionError, IngestionService


@pytest.fixture
def ingestion_service(monkeypatch):
    service = MagicMock()
    service.ingest = AsyncMock(return_value=12)
    monkeypatch.setattr("rag_agent.main.get_ingestion_service", lambda: service)
    return service


def _use_settings(monkeypatch, **overrides) -> None:
    settings = Settings(**overrides)
    monkeypatch.setattr("rag_agent.main.get_settings", lambda: settings)


@pytest.mark.asyncio
async def test_ingests_when_configured(monkeypatch, ingestion_service) -> None:
    """Test that startup ingestion runs with a configured index."""
    _use_settings(monkeypatch, ingest_on_startup=True, pinecone_api_key="p-key")

    assert await run_startup_ingestion() == 12
    ingestion_service.ingest.assert_awaited_once()


@pytest.mark.asyncio
async def test_skipped_when_disabled(monkeypatch, ingestion_service) -> None:
    """Test the INGEST_ON_STARTUP switch."""
    _use_settings(monkeypatch, ingest_on_startup=False, pinecone_api_key="p-key")

    assert await run_startup_ingestion() == 0
    ingestion_service.ingest.assert_not_called()


@pytest.mark.asyncio
async def test_skipped_without_index_key(monkeypatch, ingestion_service) -> None:
    """Test that a missing Pinecone key skips ingestion instead of crashing."""
    _use_settings(monkeypatch, ingest_on_startup=True, pinecone_api_key=None)

    assert await run_startup_ingestion() == 0
    ingestion_service.ingest.assert_not_called()


@pytest.mark.asyncio
async def test_failure_does_not_block_startup(monkeypatch, ingestion_service) -> None:
    """Test that an ingestion failure is logged and startup continues."""
    _use_settings(monkeypatch, ingest_on_startup=True, pinecone_api_key="p-key")
    ingestion_service.ingest.side_effect = IngestionError("index not ready")

    assert await run_startup_ingestion() == 0


@pytest.mark.asyncio
async def test_undecodable_document_does_not_block_startup(monkeypatch, tmp_path) -> None:
    """Test that a latin-1 document is skipped instead of aborting startup."""
    (tmp_path / "bad.txt").write_bytes(b"caf\xe9 latin-1")
    settings = Settings(
        ingest_on_startup=True, pinecone_api_key="p-key", documents_dir=tmp_path
    )
    monkeypatch.setattr("rag_agent.main.get_settings", lambda: settings)
    index_client = MagicMock(spec=VectorIndexClient)
    service = IngestionService(MagicMock(spec=Embedder), index_client, settings)
    monkeypatch.setattr("rag_agent.main.get_ingestion_service", lambda: service)

    assert await run_startup_ingestion() == 0
    index_client.ensure_index.assert_not_called()
