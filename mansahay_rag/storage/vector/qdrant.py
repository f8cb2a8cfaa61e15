"""
Mansahay RAG - Qdrant Vector Store Implementation
"""

from __future__ import annotations

import asyncio
import time
from typing import Any, Optional

from qdrant_client import AsyncQdrantClient
from qdrant_client.http import models
from qdrant_client.http.exceptions import UnexpectedResponse

from mansahay_rag.core.config import settings
from mansahay_rag.core.exceptions import VectorStoreError
from mansahay_rag.storage.base import VectorStore


class QdrantSearchResult:
    """Search result from Qdrant."""

    def __init__(
        self,
        id: str,
        score: float,
        payload: dict[str, Any],
    ):
        self.id = id
        self.score = score
        self.payload = payload


def _is_missing_collection(error: UnexpectedResponse) -> bool:
    return error.status_code == 404


class QdrantVectorStore(VectorStore[QdrantSearchResult]):
    """
    Qdrant implementation of vector store.

    The connection is opened on first use and re-attempted on every call
    while Qdrant is unreachable, so a server started before Qdrant recovers
    without a restart. Each upsert batch is bounded by ``timeout``.
    """

    INSERT_BATCH_SIZE = 256

    def __init__(
        self,
        url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self._url = url or settings.QDRANT_URL
        self._api_key = api_key or settings.QDRANT_API_KEY
        self._timeout = timeout or settings.EXTERNAL_CALL_TIMEOUT_SECONDS
        self._client: Optional[AsyncQdrantClient] = None
        self._connect_lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> None:
        """Connect to Qdrant server. Safe to call repeatedly."""
        async with self._connect_lock:
            if self._client is not None:
                return

            client = AsyncQdrantClient(
                url=self._url,
                api_key=self._api_key,
                timeout=max(1, int(self._timeout)),
            )
            try:
                await client.get_collections()
            except Exception as e:
                await client.close()
                raise VectorStoreError(
                    f"Failed to connect to Qdrant: {e}",
                    details={"url": self._url},
                )

            self._client = client
            self.logger.info("Connected to Qdrant", url=self._url)

    async def disconnect(self) -> None:
        """Disconnect from Qdrant server."""
        if self._client is not None:
            await self._client.close()
            self._client = None
            self.logger.info("Disconnected from Qdrant")

    async def health_check(self) -> dict[str, Any]:
        """Check Qdrant health, reconnecting if needed."""
        try:
            client = await self._ensure_connected()
        except VectorStoreError as e:
            return {"status": "disconnected", "error": e.message, "latency_ms": 0}

        try:
            start = time.perf_counter()
            await client.get_collections()
            latency = (time.perf_counter() - start) * 1000
            return {"status": "healthy", "latency_ms": round(latency, 2)}
        except Exception as e:
            return {"status": "unhealthy", "error": str(e), "latency_ms": 0}

    async def _ensure_connected(self) -> AsyncQdrantClient:
        if self._client is None:
            await self.connect()
        return self._client

    async def create_collection(self, name: str, dimension: int) -> None:
        """Create a cosine-distance collection with a keyword index on ``source``."""
        client = await self._ensure_connected()

        try:
            await client.create_collection(
                collection_name=name,
                vectors_config=models.VectorParams(
                    size=dimension,
                    distance=models.Distance.COSINE,
                ),
            )
            # Delete-by-source filters on this field
            await client.create_payload_index(
                collection_name=name,
                field_name="source",
                field_schema=models.PayloadSchemaType.KEYWORD,
            )
            self.logger.info(
                "Created Qdrant collection",
                collection=name,
                dimension=dimension,
            )
        except UnexpectedResponse as e:
            if "already exists" in str(e):
                self.logger.debug("Collection already exists", collection=name)
            else:
                raise VectorStoreError(f"Failed to create collection: {e}")
        except Exception as e:
            raise VectorStoreError(f"Failed to create collection {name}: {e}")

    async def collection_exists(self, name: str) -> bool:
        """Check if a collection exists."""
        client = await self._ensure_connected()

        try:
            return await client.collection_exists(collection_name=name)
        except Exception as e:
            raise VectorStoreError(f"Failed to check collection {name}: {e}")

    async def insert(
        self,
        collection: str,
        ids: list[str],
        vectors: list[list[float]],
        payloads: Optional[list[dict[str, Any]]] = None,
    ) -> None:
        """Upsert vectors into a collection in input order."""
        client = await self._ensure_connected()

        if len(ids) != len(vectors):
            raise VectorStoreError("IDs and vectors must have same length")

        payloads = payloads or [{} for _ in ids]
        if len(payloads) != len(ids):
            raise VectorStoreError("Payloads must have same length as IDs")

        points = [
            models.PointStruct(
                id=id_,
                vector=vector,
                payload=payload,
            )
            for id_, vector, payload in zip(ids, vectors, payloads)
        ]

        for start in range(0, len(points), self.INSERT_BATCH_SIZE):
            batch = points[start:start + self.INSERT_BATCH_SIZE]
            details = {
                "collection": collection,
                "inserted_before_failure": start,
                "total": len(points),
            }
            try:
                await asyncio.wait_for(
                    client.upsert(
                        collection_name=collection,
                        points=batch,
                        wait=True,
                    ),
                    timeout=self._timeout,
                )
            except asyncio.TimeoutError:
                self.logger.error("Upsert timed out", timeout=self._timeout, **details)
                raise VectorStoreError(
                    f"Upsert timed out after {self._timeout}s",
                    details=details,
                )
            except Exception as e:
                raise VectorStoreError(f"Failed to insert vectors: {e}", details=details)

        self.logger.debug(
            "Inserted vectors",
            collection=collection,
            count=len(points),
        )

    async def search(
        self,
        collection: str,
        query_vector: list[float],
        top_k: int = 10,
        filters: Optional[dict[str, Any]] = None,
    ) -> list[QdrantSearchResult]:
        """Search for similar vectors."""
        client = await self._ensure_connected()

        query_filter = self._build_filter(filters) if filters else None

        try:
            response = await client.query_points(
                collection_name=collection,
                query=query_vector,
                limit=top_k,
                query_filter=query_filter,
                with_payload=True,
                with_vectors=False,
            )
        except UnexpectedResponse as e:
            if _is_missing_collection(e):
                self.logger.debug("Searched missing collection", collection=collection)
                return []
            raise VectorStoreError(f"Search failed: {e}", details={"collection": collection})
        except Exception as e:
            raise VectorStoreError(
                f"Search failed: {e}",
                details={"collection": collection},
            )

        return [
            QdrantSearchResult(
                id=str(point.id),
                score=point.score,
                payload=point.payload or {},
            )
            for point in response.points
        ]

    async def count(
        self,
        collection: str,
        filters: Optional[dict[str, Any]] = None,
    ) -> int:
        """Count points in a collection. A missing collection holds none."""
        client = await self._ensure_connected()

        try:
            result = await client.count(
                collection_name=collection,
                count_filter=self._build_filter(filters) if filters else None,
                exact=True,
            )
            return result.count
        except UnexpectedResponse as e:
            if _is_missing_collection(e):
                return 0
            raise VectorStoreError(f"Count failed: {e}")
        except Exception as e:
            raise VectorStoreError(f"Count failed: {e}")

    async def delete_by_source(self, collection: str, source: str) -> int:
        """Delete every chunk ingested from the given source file."""
        client = await self._ensure_connected()
        filters = {"source": source}

        removed = await self.count(collection, filters)
        if removed == 0:
            return 0

        try:
            await client.delete(
                collection_name=collection,
                points_selector=models.FilterSelector(filter=self._build_filter(filters)),
                wait=True,
            )
        except Exception as e:
            raise VectorStoreError(
                f"Failed to delete vectors for {source}: {e}",
                details={"collection": collection, "source": source},
            )

        self.logger.info(
            "Deleted source vectors",
            collection=collection,
            source=source,
            count=removed,
        )
        return removed

    def _build_filter(self, filters: dict[str, Any]) -> models.Filter:
        """Build Qdrant filter from dict."""
        conditions = []

        for key, value in filters.items():
            if isinstance(value, list):
                conditions.append(
                    models.FieldCondition(
                        key=key,
                        match=models.MatchAny(any=value),
                    )
                )
            else:
                conditions.append(
                    models.FieldCondition(
                        key=key,
                        match=models.MatchValue(value=value),
                    )
                )

        return models.Filter(must=conditions)


# Singleton instance
_vector_store: Optional[QdrantVectorStore] = None


def get_vector_store() -> QdrantVectorStore:
    """Get the global vector store instance."""
    global _vector_store
    if _vector_store is None:
        _vector_store = QdrantVectorStore()
    return _vector_store


async def init_vector_store(dimension: Optional[int] = None) -> QdrantVectorStore:
    """Connect the vector store and make sure the default collection exists."""
    store = get_vector_store()
    await store.connect()
    await store.ensure_collection(
        settings.QDRANT_COLLECTION_NAME,
        dimension or settings.EMBEDDING_DIMENSIONS,
    )
    return store


async def close_vector_store() -> None:
    """Close the vector store connection."""
    global _vector_store
    if _vector_store is not None:
        await _vector_store.disconnect()
        _vector_store = None
