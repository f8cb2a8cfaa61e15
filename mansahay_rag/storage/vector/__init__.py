"""
Mansahay RAG - Vector Storage Module
"""

from mansahay_rag.storage.vector.qdrant import (
    QdrantVectorStore,
    QdrantSearchResult,
    get_vector_store,
    init_vector_store,
    close_vector_store,
)

__all__ = [
    "QdrantVectorStore",
    "QdrantSearchResult",
    "get_vector_store",
    "init_vector_store",
    "close_vector_store",
]
