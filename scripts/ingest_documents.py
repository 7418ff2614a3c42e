#!/usr/bin/env python3
"""Script to ingest the documents directory into the vector index.

Run this once after adding or changing documents when the service is
started with INGEST_ON_STARTUP=false.

Usage:
    python scripts/ingest_documents.py [--dry-run] [--batch-size N] [--documents-dir PATH]

Options:
    --dry-run             Show what would be ingested without touching the index
    --batch-size N        Number of chunks per upsert call (default: from settings)
    --documents-dir PATH  Directory to read instead of DOCUMENTS_DIR
"""

import argparse
import asyncio
import logging
import sys
from collections import Counter
from pathlib import Path

from rag_agent.api.dependencies import get_ingestion_service
from rag_agent.core.config import get_settings
from rag_agent.observability import configure_logging
from rag_agent.services import IngestionError
from rag_agent.services.ingestion import load_documents

logger = logging.getLogger(__name__)


def dry_run(documents_dir: Path) -> int:
    """Log the chunks each file would produce and return the total."""
    settings = get_settings()
    chunks = load_documents(documents_dir, settings.chunk_size, settings.document_extensions)
    for source, count in sorted(Counter(chunk.source for chunk in chunks).items()):
        logger.info(f"[DRY RUN] {source}: {count} chunks")
    logger.info(f"[DRY RUN] Would upsert {len(chunks)} chunks into '{settings.index_name}'")
    return len(chunks)


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Ingest documents into the vector index")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be ingested without making changes",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=None,
        help="Number of chunks per upsert call",
    )
    parser.add_argument(
        "--documents-dir",
        type=Path,
        default=None,
        help="Directory containing .md/.txt documents",
    )
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(log_level=settings.log_level, log_format="console")
    documents_dir = args.documents_dir or settings.documents_dir

    if args.dry_run:
        dry_run(documents_dir)
        return 0

    if not settings.vector_index_configured:
        logger.error("PINECONE_API_KEY is not set")
        return 1

    try:
        total = asyncio.run(
            get_ingestion_service().ingest(documents_dir=documents_dir, batch_size=args.batch_size)
        )
    except IngestionError as e:
        logger.error(f"Ingestion failed: {e}")
        return 1

    logger.info(f"Successfully ingested {total} chunks")
    return 0


if __name__ == "__main__":
    sys.exit(main())
