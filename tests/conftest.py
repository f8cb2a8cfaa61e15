"""
Mansahay RAG - Test Configuration and Fixtures
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from mansahay_rag.core.types import Chunk, Document, SearchResult


# =============================================================================
# Helpers
# =============================================================================

def make_chunk(
    source: str,
    start: int,
    content: Optional[str] = None,
) -> Chunk:
    """Build a chunk identified by (source, start)."""
    content = content or f"{source}@{start}"
    return Chunk(
        content=content,
        source=source,
        location_start=start,
        location_end=start + len(content),
    )


def make_results(*keys: str) -> list[SearchResult]:
    """Build a ranked list where each key names a distinct chunk."""
    return [
        SearchResult(chunk=make_chunk(f"{key}.txt", 0, content=key), score=1.0 - i * 0.1)
        for i, key in enumerate(keys)
    ]


@pytest.fixture
def chunk_factory():
    return make_chunk


@pytest.fixture
def results_factory():
    return make_results


# =============================================================================
# Core Fixtures
# =============================================================================

@pytest.fixture
def sample_query() -> str:
    """Sample user question."""
    return "How do I calm down during a panic attack?"


@pytest.fixture
def sample_document_content() -> str:
    """Sample knowledge base content."""
    return (
        "Grounding Techniques\n\n"
        "The 5-4-3-2-1 method asks you to name five things you can see, four you "
        "can touch, three you can hear, two you can smell and one you can taste.\n\n"
        "Box Breathing\n\n"
        "Breathe in for four seconds. Hold for four seconds. Breathe out for four "
        "seconds. Hold again for four seconds. Repeat until your heart rate slows.\n\n"
        "When to Seek Help\n\n"
        "If panic attacks happen often or stop you from doing daily tasks, talk to "
        "a therapist or psychiatrist. In a crisis, contact local emergency services."
    )


@pytest.fixture
def sample_document(sample_document_content) -> Document:
    return Document(
        content=sample_document_content,
        source="coping_guide.txt",
        uploaded_at=datetime(2024, 5, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def sample_chunks() -> list[Chunk]:
    return [make_chunk("coping_guide.txt", start) for start in (0, 800, 1600)]


# =============================================================================
# Mock Fixtures
# =============================================================================

@pytest.fixture
def mock_llm_client() -> MagicMock:
    """Mock LLM client returning three expansions."""
    client = MagicMock()
    client.generate = AsyncMock(return_value=MagicMock(
        content="panic attack coping steps\nhow to stop a panic attack\ncalming techniques for anxiety",
    ))
    return client


@pytest.fixture
def mock_embedding_provider() -> MagicMock:
    """Mock embedding provider with order-preserving fake vectors."""
    provider = MagicMock()
    provider.dimensions = 4

    async def embed_texts(texts):
        return MagicMock(
            embeddings=[[float(i), 0.0, 0.0, 1.0] for i, _ in enumerate(texts)],
            tokens_used=len(texts),
        )

    provider.embed_texts = AsyncMock(side_effect=embed_texts)
    provider.embed_query = AsyncMock(return_value=[0.1, 0.2, 0.3, 0.4])
    return provider


@pytest.fixture
def mock_vector_store() -> MagicMock:
    """Mock vector store."""
    store = MagicMock()
    store.is_connected = True
    store.ensure_collection = AsyncMock()
    store.insert = AsyncMock()
    store.search = AsyncMock(return_value=[])
    store.count = AsyncMock(return_value=0)
    store.delete_by_source = AsyncMock(return_value=0)
    store.health_check = AsyncMock(return_value={"status": "healthy", "latency_ms": 1.5})
    return store


@pytest.fixture
def test_client():
    """Create a test client for the FastAPI app.

    Not entered as a context manager, so the lifespan (which connects to
    Qdrant) does not run.
    """
    from fastapi.testclient import TestClient
    from mansahay_rag.app import create_app

    app = create_app()
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()
