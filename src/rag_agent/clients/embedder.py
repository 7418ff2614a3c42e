"""Local sentence embedding model, loaded once and shared.

The same model must embed both ingested chunks and queries; vectors from
different models are not comparable and mismatches fail silently.
"""

import logging
import threading
from typing import Any

logger = logging.getLogger(__name__)


class EmbeddingError(Exception):
    """The embedding model could not be loaded or failed to encode."""


class Embedder:
    """Thread-safe, lazily-initialised wrapper around a SentenceTransformer.

    The model is loaded on first use behind a lock, so concurrent first
    callers block until the single load finishes and then share it. A failed
    load is remembered and re-raised without retrying for the life of the
    process.

    Encoding uses mean pooling and L2 normalisation, matching cosine
    similarity in the vector index.
    """

    def __init__(self, model_name: str, dimension: int | None = None):
        self.model_name = model_name
        self.dimension = dimension
        self._model: Any = None
        self._load_error: EmbeddingError | None = None
        self._lock = threading.Lock()

    @property
    def loaded(self) -> bool:
        return self._model is not None

    def _get_model(self) -> Any:
        if self._model is not None:
            return self._model

        with self._lock:
            if self._load_error is not None:
                raise self._load_error
            if self._model is None:
                try:
                    from sentence_transformers import SentenceTransformer

                    logger.info(f"Loading embedding model: {self.model_name}")
                    self._model = SentenceTransformer(self.model_name)
                except Exception as e:
                    logger.error(f"Failed to load embedding model {self.model_name}: {e}")
                    self._load_error = EmbeddingError(
                        f"Failed to load embedding model {self.model_name}: {e}"
                    )
                    raise self._load_error from e
        return self._model

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        """Embed a batch of texts. Blocking; call from a worker thread."""
        if not texts:
            return []

        model = self._get_model()
        try:
            vectors = model.encode(texts, normalize_embeddings=True)
        except Exception as e:
            raise EmbeddingError(f"Embedding failed: {e}") from e

        embeddings = [[float(x) for x in vector] for vector in vectors]
        if self.dimension is not None and embeddings and len(embeddings[0]) != self.dimension:
            raise EmbeddingError(
                f"Model {self.model_name} produced {len(embeddings[0])}-d vectors, "
                f"expected {self.dimension}"
            )
        return embeddings

    def embed_query(self, text: str) -> list[float]:
        """Embed a single query string."""
        return self.embed_documents([text])[0]
