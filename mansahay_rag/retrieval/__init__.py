"""
Mansahay RAG - Retrieval Module

Query expansion, vector search and rank fusion.
"""

from __future__ import annotations

from mansahay_rag.retrieval.query import QueryExpander
from mansahay_rag.retrieval.search import (
    ChunkIndexer,
    FusionSearchEngine,
    VectorSearcher,
    get_search_engine,
    reciprocal_rank_fusion,
)

__all__ = [
    "QueryExpander",
    "VectorSearcher",
    "ChunkIndexer",
    "FusionSearchEngine",
    "get_search_engine",
    "reciprocal_rank_fusion",
]
