"""
Mansahay RAG - Shared Type Definitions
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# Document Types
# =============================================================================

class Document(BaseModel):
    """Raw text loaded from one uploaded file."""
    model_config = ConfigDict(frozen=True)

    content: str
    source: str
    uploaded_at: datetime = Field(default_factory=utcnow)
    mime_type: Optional[str] = None
    metadata: dict[str, Any] = Field(default_factory=dict)


class Chunk(BaseModel):
    """
    A contiguous, overlap-aware slice of a Document.

    Offsets are character positions in the source text; ``location_end``
    is exclusive. ``(source, location_start)`` identifies the chunk across
    fused result lists.
    """
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    content: str
    source: str
    location_start: int
    location_end: int
    line_from: int = 1
    line_to: int = 1
    position: int = 0
    uploaded_at: datetime = Field(default_factory=utcnow)
    resource_id: Optional[str] = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def identity(self) -> tuple[str, int]:
        return (self.source, self.location_start)

    def to_payload(self) -> dict[str, Any]:
        """Serialize for storage alongside the chunk's vector."""
        return {
            "content": self.content,
            "source": self.source,
            "location_start": self.location_start,
            "location_end": self.location_end,
            "line_from": self.line_from,
            "line_to": self.line_to,
            "position": self.position,
            "uploaded_at": self.uploaded_at.isoformat(),
            "resource_id": self.resource_id,
            "metadata": self.metadata,
        }

    @classmethod
    def from_payload(cls, chunk_id: str, payload: dict[str, Any]) -> "Chunk":
        """Rebuild a chunk from a stored payload."""
        content = payload.get("content", "")
        start = int(payload.get("location_start", 0))
        return cls(
            id=chunk_id,
            content=content,
            source=payload.get("source", "unknown"),
            location_start=start,
            location_end=int(payload.get("location_end", start + len(content))),
            line_from=int(payload.get("line_from", 1)),
            line_to=int(payload.get("line_to", 1)),
            position=int(payload.get("position", 0)),
            uploaded_at=payload.get("uploaded_at") or utcnow(),
            resource_id=payload.get("resource_id"),
            metadata=payload.get("metadata") or {},
        )


# =============================================================================
# Retrieval Types
# =============================================================================

class SearchResult(BaseModel):
    """One entry of a ranked similarity-search list."""
    chunk: Chunk
    score: float

    @property
    def identity(self) -> tuple[str, int]:
        return self.chunk.identity


class FusedResult(BaseModel):
    """A chunk after Reciprocal Rank Fusion.

    ``score`` is a rank-fusion score, not a probability.
    """
    chunk: Chunk
    score: float
    appearances: int = 1


class FusionSearchResult(BaseModel):
    """Outcome of one multi-query fusion search."""
    query: str
    variants: list[str]
    results: list[FusedResult]
    failed_variants: list[str] = Field(default_factory=list)
    latency_ms: float = 0.0


# =============================================================================
# Ingestion Types
# =============================================================================

class IngestionResult(BaseModel):
    """Result of ingesting one file."""
    chunk_count: int
    resource_id: str
    source: str
    collection: str
