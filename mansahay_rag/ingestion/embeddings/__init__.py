"""
Mansahay RAG - Embeddings Module
"""

from __future__ import annotations

from mansahay_rag.ingestion.embeddings.base import EmbeddingProvider, EmbeddingResult
from mansahay_rag.ingestion.embeddings.openai import OpenAIEmbeddings, get_embedding_provider

__all__ = [
    # Base
    "EmbeddingProvider",
    "EmbeddingResult",
    # OpenAI
    "OpenAIEmbeddings",
    "get_embedding_provider",
]
