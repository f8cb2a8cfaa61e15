"""
Mansahay RAG - Text Chunking Module
"""

from __future__ import annotations

from mansahay_rag.ingestion.chunking.base import TextChunker
from mansahay_rag.ingestion.chunking.window import OverlappingTextChunker, chunk_document

__all__ = [
    # Base
    "TextChunker",
    # Overlapping window
    "OverlappingTextChunker",
    "chunk_document",
]
