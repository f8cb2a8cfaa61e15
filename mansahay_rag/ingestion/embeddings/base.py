"""
Mansahay RAG - Embedding Gateway Interface
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from mansahay_rag.core.logging import LoggerMixin


@dataclass
class EmbeddingResult:
    """Vectors for a batch of texts, in input order."""
    embeddings: list[list[float]]
    tokens_used: int = 0


class EmbeddingProvider(ABC, LoggerMixin):
    """
    Turns chunk text and search queries into vectors.

    ChunkIndexer calls ``embed_texts`` at ingest time and VectorSearcher
    calls ``embed_query`` once per query variant; ``dimensions`` sizes any
    collection created on first write.
    """

    @property
    @abstractmethod
    def dimensions(self) -> int:
        pass

    @abstractmethod
    async def embed_texts(self, texts: list[str]) -> EmbeddingResult:
        """Embed texts, returning one vector per text in input order."""
        pass

    async def embed_query(self, query: str) -> list[float]:
        result = await self.embed_texts([query])
        return result.embeddings[0]
