"""
Mansahay RAG - Ingestion Pipeline

load -> chunk -> embed + upsert -> remove the temporary upload.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Optional, Union
from uuid import uuid4

from mansahay_rag.core.config import settings
from mansahay_rag.core.logging import LoggerMixin
from mansahay_rag.core.types import Document, IngestionResult
from mansahay_rag.ingestion.chunking import OverlappingTextChunker, TextChunker
from mansahay_rag.ingestion.processors import ProcessorRegistry, get_processor_registry
from mansahay_rag.retrieval.search.vector import ChunkIndexer


class IngestionPipeline(LoggerMixin):
    """
    Turns an uploaded file into indexed chunks.

    Nothing is rolled back on failure. A file whose chunks could not all be
    stored is reported as failed and should be re-ingested; the temporary
    upload is only removed once every chunk has been written. There is no
    overall deadline: each embedding request and upsert batch carries its own.
    """

    def __init__(
        self,
        registry: Optional[ProcessorRegistry] = None,
        chunker: Optional[TextChunker] = None,
        indexer: Optional[ChunkIndexer] = None,
        collection_name: Optional[str] = None,
    ):
        self.registry = registry or get_processor_registry()
        self.chunker = chunker or OverlappingTextChunker(
            chunk_size=settings.CHUNK_SIZE,
            chunk_overlap=settings.CHUNK_OVERLAP,
        )
        self.indexer = indexer or ChunkIndexer()
        self.collection_name = collection_name or settings.QDRANT_COLLECTION_NAME

    async def ingest_file(
        self,
        path: Union[str, Path],
        filename: Optional[str] = None,
        mimetype: Optional[str] = None,
        collection: Optional[str] = None,
    ) -> IngestionResult:
        """
        Ingest a file stored on disk.

        Args:
            path: Temporary location of the upload
            filename: Original filename, used as the chunk source
            mimetype: MIME type reported by the uploader
            collection: Target collection (defaults to the configured one)

        Raises:
            UnsupportedFormatError: If the file cannot be loaded; the file is kept
            EmbeddingError, VectorStoreError: If indexing fails; the file is kept
        """
        path = Path(path)
        document = await self.registry.load(path, source=filename, mimetype=mimetype)

        result = await self.ingest_document(document, collection)

        path.unlink(missing_ok=True)
        self.logger.debug("Removed temporary upload", path=str(path))
        return result

    async def ingest_document(
        self,
        document: Document,
        collection: Optional[str] = None,
    ) -> IngestionResult:
        """Chunk and index an in-memory document."""
        start_time = time.perf_counter()
        collection = collection or self.collection_name
        resource_id = str(uuid4())

        chunks = self.chunker.chunk(document, resource_id=resource_id)
        stored = await self.indexer.upsert(chunks, collection)

        self.logger.info(
            "Document ingested",
            source=document.source,
            collection=collection,
            resource_id=resource_id,
            chunks=stored,
            latency_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )

        return IngestionResult(
            chunk_count=stored,
            resource_id=resource_id,
            source=document.source,
            collection=collection,
        )


# Singleton instance
_pipeline: Optional[IngestionPipeline] = None


def get_ingestion_pipeline() -> IngestionPipeline:
    """Get the global ingestion pipeline instance."""
    global _pipeline
    if _pipeline is None:
        _pipeline = IngestionPipeline()
    return _pipeline
