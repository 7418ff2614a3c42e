"""Adapter around the Pinecone vector index."""

import asyncio
import logging
import time
from typing import Any

from pinecone import Pinecone, ServerlessSpec

logger = logging.getLogger(__name__)


class VectorIndexError(Exception):
    """Error talking to the vector index."""


class VectorIndexClient:
    """Thin synchronous wrapper over a single Pinecone index.

    Methods block on the network; async callers should run them with
    ``asyncio.to_thread``. ``ensure_index`` is the exception and is
    itself async because it waits for readiness.
    """

    def __init__(
        self,
        api_key: str | None,
        index_name: str,
        cloud: str = "aws",
        region: str = "us-east-1",
        client: Any = None,
    ):
        self.index_name = index_name
        self.cloud = cloud
        self.region = region
        self._api_key = api_key
        self._client = client
        self._index: Any = None

    @property
    def configured(self) -> bool:
        return self._client is not None or bool(self._api_key)

    def _get_client(self) -> Any:
        if self._client is None:
            if not self._api_key:
                raise VectorIndexError("Pinecone API key is not configured")
            self._client = Pinecone(api_key=self._api_key)
        return self._client

    def _get_index(self) -> Any:
        if self._index is None:
            self._index = self._get_client().Index(self.index_name)
        return self._index

    def index_exists(self) -> bool:
        try:
            return self.index_name in self._get_client().list_indexes().names()
        except VectorIndexError:
            raise
        except Exception as e:
            raise VectorIndexError(f"Failed to list indexes: {e}") from e

    def create_index(self, dimension: int, metric: str) -> None:
        try:
            self._get_client().create_index(
                name=self.index_name,
                dimension=dimension,
                metric=metric,
                spec=ServerlessSpec(cloud=self.cloud, region=self.region),
            )
        except Exception as e:
            raise VectorIndexError(f"Failed to create index {self.index_name}: {e}") from e
        logger.info(f"Created index '{self.index_name}' (dimension={dimension}, metric={metric})")

    def is_ready(self) -> bool:
        try:
            status = self._get_client().describe_index(self.index_name).status
        except Exception as e:
            raise VectorIndexError(f"Failed to describe index {self.index_name}: {e}") from e
        return bool(status["ready"])

    async def ensure_index(
        self,
        dimension: int,
        metric: str,
        ready_timeout: float = 120.0,
        poll_interval: float = 2.0,
    ) -> bool:
        """
        Create the index if missing and wait until it accepts queries.

        Args:
            dimension: Embedding dimensionality, fixed at creation
            metric: Similarity metric, fixed at creation
            ready_timeout: Seconds to wait for readiness
            poll_interval: Seconds between readiness checks

        Returns:
            True if the index was created by this call

        Raises:
            VectorIndexError: If creation fails or readiness times out
        """
        if await asyncio.to_thread(self.index_exists):
            return False

        await asyncio.to_thread(self.create_index, dimension, metric)

        deadline = time.monotonic() + ready_timeout
        while not await asyncio.to_thread(self.is_ready):
            if time.monotonic() >= deadline:
                raise VectorIndexError(
                    f"Index {self.index_name} not ready after {ready_timeout:.0f}s"
                )
            await asyncio.sleep(poll_interval)

        logger.info(f"Index '{self.index_name}' is ready")
        return True

    def upsert(self, vectors: list[dict[str, Any]]) -> None:
        """Upsert ``{"id", "values", "metadata"}`` records."""
        try:
            self._get_index().upsert(vectors=vectors)
        except VectorIndexError:
            raise
        except Exception as e:
            raise VectorIndexError(f"Upsert failed: {e}") from e

    def query(self, vector: list[float], top_k: int) -> list[dict[str, Any]]:
        """
        Nearest-neighbour query with metadata.

        Returns:
            Matches as ``{"id", "score", "metadata"}`` dicts, in index order
        """
        try:
            results = self._get_index().query(
                vector=vector,
                top_k=top_k,
                include_metadata=True,
            )
        except VectorIndexError:
            raise
        except Exception as e:
            raise VectorIndexError(f"Query failed: {e}") from e

        matches = _field(results, "matches") or []
        return [
            {
                "id": _field(match, "id"),
                "score": _field(match, "score"),
                "metadata": _field(match, "metadata") or {},
            }
            for match in matches
        ]


def _field(obj: Any, name: str) -> Any:
    """Read a field from a Pinecone response object or plain dict."""
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)
