"""
Mansahay RAG - Vector Search and Indexing
"""

from __future__ import annotations

import time
from typing import Optional

from mansahay_rag.core.config import settings
from mansahay_rag.core.exceptions import EmbeddingError, RAGException, SearchError, VectorStoreError
from mansahay_rag.core.logging import LoggerMixin
from mansahay_rag.core.types import Chunk, SearchResult
from mansahay_rag.ingestion.embeddings import EmbeddingProvider, get_embedding_provider
from mansahay_rag.storage.base import VectorStore
from mansahay_rag.storage.vector import get_vector_store


class VectorSearcher(LoggerMixin):
    """Vector similarity search using embeddings."""

    def __init__(
        self,
        embedding_provider: Optional[EmbeddingProvider] = None,
        vector_store: Optional[VectorStore] = None,
        collection_name: Optional[str] = None,
    ):
        self._embeddings = embedding_provider
        self._store = vector_store
        self.collection_name = collection_name or settings.QDRANT_COLLECTION_NAME

    @property
    def embeddings(self) -> EmbeddingProvider:
        if self._embeddings is None:
            self._embeddings = get_embedding_provider()
        return self._embeddings

    @property
    def store(self) -> VectorStore:
        if self._store is None:
            self._store = get_vector_store()
        return self._store

    async def similarity_search(
        self,
        query: str,
        k: int = 5,
        collection: Optional[str] = None,
    ) -> list[SearchResult]:
        """
        Search for chunks similar to the query.

        Args:
            query: The search text
            k: Number of results to return
            collection: Collection to search (defaults to the configured one)

        Returns:
            Ranked result list, best match first
        """
        start_time = time.perf_counter()
        collection = collection or self.collection_name

        try:
            query_embedding = await self.embeddings.embed_query(query)
            raw_results = await self.store.search(
                collection=collection,
                query_vector=query_embedding,
                top_k=k,
            )
        except (EmbeddingError, VectorStoreError):
            raise
        except RAGException as e:
            raise SearchError(e.message, details=e.details)
        except Exception as e:
            self.logger.error("Vector search failed", error=str(e))
            raise SearchError(f"Vector search failed: {e}")

        results = [
            SearchResult(
                chunk=Chunk.from_payload(r.id, r.payload),
                score=r.score,
            )
            for r in raw_results
        ]

        self.logger.debug(
            "Vector search completed",
            query_length=len(query),
            top_k=k,
            results_found=len(results),
            latency_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return results


class ChunkIndexer(LoggerMixin):
    """
    Embeds chunks and writes them to the vector store in creation order.

    A collection is created on its first write, sized to the embedding
    provider's dimensions.
    """

    def __init__(
        self,
        embedding_provider: Optional[EmbeddingProvider] = None,
        vector_store: Optional[VectorStore] = None,
        collection_name: Optional[str] = None,
    ):
        self._embeddings = embedding_provider
        self._store = vector_store
        self.collection_name = collection_name or settings.QDRANT_COLLECTION_NAME
        self._ready_collections: set[str] = set()

    @property
    def embeddings(self) -> EmbeddingProvider:
        if self._embeddings is None:
            self._embeddings = get_embedding_provider()
        return self._embeddings

    @property
    def store(self) -> VectorStore:
        if self._store is None:
            self._store = get_vector_store()
        return self._store

    async def _prepare_collection(self, collection: str) -> None:
        if collection in self._ready_collections:
            return
        await self.store.ensure_collection(collection, self.embeddings.dimensions)
        self._ready_collections.add(collection)

    async def upsert(
        self,
        chunks: list[Chunk],
        collection: Optional[str] = None,
    ) -> int:
        """Embed and store chunks. Returns the number stored."""
        if not chunks:
            return 0

        collection = collection or self.collection_name
        result = await self.embeddings.embed_texts([c.content for c in chunks])

        if len(result.embeddings) != len(chunks):
            raise EmbeddingError(
                "Embedding count does not match chunk count",
                details={"chunks": len(chunks), "embeddings": len(result.embeddings)},
            )

        await self._prepare_collection(collection)
        await self.store.insert(
            collection=collection,
            ids=[c.id for c in chunks],
            vectors=result.embeddings,
            payloads=[c.to_payload() for c in chunks],
        )

        self.logger.info(
            "Indexed chunks",
            collection=collection,
            count=len(chunks),
            tokens_used=result.tokens_used,
        )
        return len(chunks)
