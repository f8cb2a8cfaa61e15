"""
Mansahay RAG - Query Processing Module
"""

from mansahay_rag.retrieval.query.expansion import QueryExpander

__all__ = ["QueryExpander"]
