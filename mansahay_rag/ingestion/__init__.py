"""
Mansahay RAG - Ingestion Module

This module handles document ingestion:
- Document loading (PDF, plain text)
- Overlapping text chunking
- Embedding generation

The pipeline that ties them to the vector store lives in
``mansahay_rag.ingestion.pipeline``.
"""

from __future__ import annotations

from mansahay_rag.ingestion.processors import (
    DocumentProcessor,
    ProcessedDocument,
    ProcessorRegistry,
    get_processor_registry,
)
from mansahay_rag.ingestion.chunking import (
    TextChunker,
    OverlappingTextChunker,
    chunk_document,
)
from mansahay_rag.ingestion.embeddings import (
    EmbeddingProvider,
    EmbeddingResult,
    OpenAIEmbeddings,
    get_embedding_provider,
)

__all__ = [
    # Processors
    "DocumentProcessor",
    "ProcessedDocument",
    "ProcessorRegistry",
    "get_processor_registry",
    # Chunking
    "TextChunker",
    "OverlappingTextChunker",
    "chunk_document",
    # Embeddings
    "EmbeddingProvider",
    "EmbeddingResult",
    "OpenAIEmbeddings",
    "get_embedding_provider",
]
