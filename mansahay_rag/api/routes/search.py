"""
Mansahay RAG - Search Routes
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from mansahay_rag.core.config import settings
from mansahay_rag.retrieval.search import FusionSearchEngine, get_search_engine


router = APIRouter()


# =============================================================================
# Request/Response Schemas
# =============================================================================

class SearchRequest(BaseModel):
    """Request schema for the search endpoint."""
    # Type is checked by the engine so a bad query gets the same error as an empty one
    query: Any = Field(None, description="The user's question")
    collection: Optional[str] = Field(None, description="Collection to search")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"query": "How can I manage panic attacks at work?"}
            ]
        }
    }


class SearchHit(BaseModel):
    """A fused search result."""
    content: str
    source: str
    score: float


class SearchResponse(BaseModel):
    """Response schema for the search endpoint."""
    results: list[SearchHit]
    variations: list[str]


@router.post("/search", response_model=SearchResponse)
async def search(
    request: SearchRequest,
    engine: FusionSearchEngine = Depends(get_search_engine),
):
    """
    Search the knowledge base with query expansion and rank fusion.

    ``score`` is 1 for every hit unless EXPOSE_FUSION_SCORES is enabled,
    in which case it is the Reciprocal Rank Fusion score (not a probability).
    """
    outcome = await engine.search(request.query, collection=request.collection)

    return SearchResponse(
        results=[
            SearchHit(
                content=r.chunk.content,
                source=r.chunk.source,
                score=r.score if settings.EXPOSE_FUSION_SCORES else 1,
            )
            for r in outcome.results
        ],
        variations=outcome.variants,
    )
