"""Ingestion service - load documents, chunk, embed and upsert into the index."""

import asyncio
from collections.abc import Iterable
from pathlib import Path

from rag_agent.clients.embedder import Embedder, EmbeddingError
from rag_agent.clients.vector_index import VectorIndexClient, VectorIndexError
from rag_agent.core.config import Settings
from rag_agent.observability import LogEvents, get_logger
from rag_agent.schemas.internal import DocumentChunk

logger = get_logger(__name__)


class IngestionError(Exception):
    """Ingestion could not complete."""


def chunk_text(text: str, chunk_size: int) -> list[str]:
    """Split text into consecutive, non-overlapping slices of ``chunk_size`` characters."""
    if chunk_size < 1:
        raise ValueError("chunk_size must be a positive integer")
    return [text[i : i + chunk_size] for i in range(0, len(text), chunk_size)]


def load_documents(
    documents_dir: Path,
    chunk_size: int,
    extensions: Iterable[str] = (".md", ".txt"),
) -> list[DocumentChunk]:
    """
    Read every matching file in ``documents_dir`` and chunk it.

    Files are read in name order so chunk offsets are stable between runs.
    A missing directory yields no chunks. Files that cannot be read or are
    not valid UTF-8 are logged and skipped.
    """
    if not documents_dir.is_dir():
        logger.info(
            LogEvents.INGESTION_SKIPPED, reason="directory not found", path=str(documents_dir)
        )
        return []

    suffixes = {ext.lower() for ext in extensions}
    files = sorted(
        p for p in documents_dir.iterdir() if p.is_file() and p.suffix.lower() in suffixes
    )

    chunks: list[DocumentChunk] = []
    for path in files:
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(LogEvents.INGESTION_FILE_SKIPPED, path=str(path), error=str(e))
            continue
        chunks.extend(
            DocumentChunk(content=piece, source=path.name)
            for piece in chunk_text(content, chunk_size)
        )
    return chunks


class IngestionService:
    """Populates the vector index from the configured documents directory."""

    def __init__(
        self,
        embedder: Embedder,
        index_client: VectorIndexClient,
        settings: Settings,
    ):
        self.embedder = embedder
        self.index_client = index_client
        self.settings = settings

    async def ingest(
        self,
        documents_dir: Path | None = None,
        batch_size: int | None = None,
    ) -> int:
        """
        Ingest all documents and return the number of chunks upserted.

        Raises:
            IngestionError: If the index cannot be prepared or a batch fails
        """
        documents_dir = documents_dir or self.settings.documents_dir
        batch_size = batch_size or self.settings.upsert_batch_size

        documents = load_documents(
            documents_dir,
            self.settings.chunk_size,
            self.settings.document_extensions,
        )
        if not documents:
            logger.info(LogEvents.INGESTION_SKIPPED, reason="no documents", path=str(documents_dir))
            return 0

        logger.info(
            LogEvents.INGESTION_STARTED,
            chunks=len(documents),
            index=self.index_client.index_name,
        )

        try:
            await self.index_client.ensure_index(
                dimension=self.settings.embedding_dimension,
                metric=self.settings.index_metric,
                ready_timeout=self.settings.index_ready_timeout,
                poll_interval=self.settings.index_ready_poll_interval,
            )

            for offset in range(0, len(documents), batch_size):
                batch = documents[offset : offset + batch_size]
                await self._upsert_batch(batch, offset)
                logger.info(
                    LogEvents.INGESTION_BATCH_UPSERTED,
                    batch=offset // batch_size + 1,
                    size=len(batch),
                )
        except (EmbeddingError, VectorIndexError) as e:
            logger.error(LogEvents.INGESTION_FAILED, error=str(e))
            raise IngestionError(str(e)) from e

        logger.info(LogEvents.INGESTION_COMPLETED, chunks=len(documents))
        return len(documents)

    async def _upsert_batch(self, batch: list[DocumentChunk], offset: int) -> None:
        embeddings = await asyncio.to_thread(
            self.embedder.embed_documents, [doc.content for doc in batch]
        )
        vectors = [
            {
                "id": f"doc-{offset + i}",
                "values": embedding,
                "metadata": {"content": doc.content, "source": doc.source},
            }
            for i, (doc, embedding) in enumerate(zip(batch, embeddings))
        ]
        await asyncio.to_thread(self.index_client.upsert, vectors)
