"""Configuration settings for the RAG agent service."""

from functools import lru_cache
from pathlib import Path

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Service identification
    service_name: str = "rag-agent"
    debug: bool = False

    # Server configuration
    host: str = "0.0.0.0"
    port: int = 3000

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    # CORS configuration
    cors_origins: list[str] = ["*"]

    # Generation service (Gemini)
    gemini_api_key: SecretStr | None = None
    gemini_api_url: str = "https://generativelanguage.googleapis.com/v1beta/models"
    gemini_model: str = "gemini-2.0-flash"
    generation_temperature: float = 0.3
    generation_top_p: float = 0.95
    generation_max_output_tokens: int = 1024
    generation_timeout: float = 60.0  # seconds

    # Vector index (Pinecone)
    pinecone_api_key: SecretStr | None = None
    pinecone_cloud: str = "aws"
    pinecone_region: str = "us-east-1"
    index_name: str = "document-chunks"
    index_metric: str = "cosine"
    index_ready_timeout: float = 120.0  # seconds
    index_ready_poll_interval: float = 2.0  # seconds

    # Embeddings
    embedding_model: str = "sentence-transformers/all-MiniLM-L6-v2"
    embedding_dimension: int = 384  # all-MiniLM-L6-v2 output size

    # Ingestion
    documents_dir: Path = Path("./documents")
    document_extensions: list[str] = [".md", ".txt"]
    chunk_size: int = 500
    upsert_batch_size: int = 50
    ingest_on_startup: bool = True

    # Request pipeline
    retrieval_top_k: int = 3
    retrieval_timeout: float = 15.0  # seconds
    plugin_timeout: float = 10.0  # seconds
    history_window: int = 2
    max_context_chars: int | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def vector_index_configured(self) -> bool:
        """Whether a vector index key is available."""
        return self.pinecone_api_key is not None and bool(
            self.pinecone_api_key.get_secret_value()
        )

    @property
    def generation_configured(self) -> bool:
        """Whether a generation-service key is available."""
        return self.gemini_api_key is not None and bool(self.gemini_api_key.get_secret_value())


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
