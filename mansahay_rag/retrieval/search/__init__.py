"""
Mansahay RAG - Search Module
"""

from mansahay_rag.retrieval.search.vector import ChunkIndexer, VectorSearcher
from mansahay_rag.retrieval.search.fusion import (
    FusionSearchEngine,
    get_search_engine,
    reciprocal_rank_fusion,
)

__all__ = [
    "VectorSearcher",
    "ChunkIndexer",
    "FusionSearchEngine",
    "get_search_engine",
    "reciprocal_rank_fusion",
]
