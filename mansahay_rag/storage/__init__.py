"""
Mansahay RAG - Storage Module

Vector storage for ingested chunks (Qdrant).
"""

from __future__ import annotations

from mansahay_rag.storage.base import VectorStore
from mansahay_rag.storage.vector import (
    QdrantVectorStore,
    QdrantSearchResult,
    get_vector_store,
    init_vector_store,
    close_vector_store,
)

__all__ = [
    # Base class
    "VectorStore",
    # Vector store
    "QdrantVectorStore",
    "QdrantSearchResult",
    "get_vector_store",
    "init_vector_store",
    "close_vector_store",
]
