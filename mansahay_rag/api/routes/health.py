"""
Mansahay RAG - Health Check Routes
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from mansahay_rag.core.types import utcnow
from mansahay_rag.storage import QdrantVectorStore, get_vector_store


router = APIRouter()

VERSION = "0.1.0"


class DetailedHealthResponse(BaseModel):
    """Detailed health check response."""
    status: str
    timestamp: str
    version: str
    components: dict[str, dict[str, Any]]


@router.get("/health", response_class=PlainTextResponse)
async def health_check():
    """Basic liveness check."""
    return "RAG Server Online"


@router.get("/health/detailed", response_model=DetailedHealthResponse)
async def detailed_health_check(
    vector_store: QdrantVectorStore = Depends(get_vector_store),
):
    """Health check with vector store connectivity. Reconnects a dropped store."""
    components: dict[str, dict[str, Any]] = {}

    try:
        components["vector_store"] = await vector_store.health_check()
    except Exception as e:
        components["vector_store"] = {"status": "error", "error": str(e), "latency_ms": 0}

    all_healthy = all(c.get("status") == "healthy" for c in components.values())

    return DetailedHealthResponse(
        status="healthy" if all_healthy else "degraded",
        timestamp=utcnow().isoformat(),
        version=VERSION,
        components=components,
    )
