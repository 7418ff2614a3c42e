"""RAG agent service - retrieval-augmented chat with session memory and plugins."""

__version__ = "0.1.0"
