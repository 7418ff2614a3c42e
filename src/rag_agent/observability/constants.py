"""Constants for observability layer."""

# HTTP header for correlation ID propagation
CORRELATION_ID_HEADER = "X-Correlation-ID"

# Service identifier for logs
SERVICE_NAME = "rag-agent"


# Log event names following the pattern: {domain}.{action}.{result}
class LogEvents:
    """Standardized log event names."""

    # Agent message lifecycle
    MESSAGE_RECEIVED = "agent.message.received"
    MESSAGE_COMPLETED = "agent.message.completed"
    MESSAGE_REJECTED = "agent.message.rejected"
    MESSAGE_FAILED = "agent.message.failed"

    # Retrieval
    RETRIEVAL_COMPLETED = "agent.retrieval.completed"
    RETRIEVAL_FAILED = "agent.retrieval.failed"
    RETRIEVAL_TIMEOUT = "agent.retrieval.timeout"

    # Plugins
    PLUGIN_DETECTED = "agent.plugin.detected"
    PLUGIN_COMPLETED = "agent.plugin.completed"
    PLUGIN_FAILED = "agent.plugin.failed"
    PLUGIN_TIMEOUT = "agent.plugin.timeout"

    # Ingestion
    INGESTION_STARTED = "ingestion.run.started"
    INGESTION_SKIPPED = "ingestion.run.skipped"
    INGESTION_FILE_SKIPPED = "ingestion.file.skipped"
    INGESTION_BATCH_UPSERTED = "ingestion.batch.upserted"
    INGESTION_COMPLETED = "ingestion.run.completed"
    INGESTION_FAILED = "ingestion.run.failed"

    # Request lifecycle events
    REQUEST_STARTED = "request.started"
    REQUEST_COMPLETED = "request.completed"
    REQUEST_FAILED = "request.failed"


# Fields that should be redacted in logs
SENSITIVE_FIELDS = frozenset({
    "password",
    "secret",
    "token",
    "api_key",
    "apikey",
    "key",
    "authorization",
    "gemini_api_key",
    "pinecone_api_key",
    "x-goog-api-key",
})

# Fields to redact (case-insensitive patterns)
SENSITIVE_FIELD_PATTERNS = frozenset({
    "password",
    "secret",
    "token",
    "api_key",
    "apikey",
    "credential",
})

# Redaction placeholder
REDACTED_VALUE = "[REDACTED]"
