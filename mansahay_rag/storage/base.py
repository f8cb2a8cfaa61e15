"""
Mansahay RAG - Vector Store Interface
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, TypeVar

from mansahay_rag.core.logging import LoggerMixin

T = TypeVar("T")


class VectorStore(ABC, LoggerMixin, Generic[T]):
    """
    Chunk vectors plus their payloads, grouped into named collections.

    Callers pass the collection explicitly so tenants can be split later.
    Implementations connect lazily: any operation on a disconnected store
    first tries to (re)connect and fails with VectorStoreError if it cannot.
    """

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        pass

    @abstractmethod
    async def connect(self) -> None:
        """Establish the connection. Safe to call repeatedly."""
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        pass

    @abstractmethod
    async def health_check(self) -> dict[str, Any]:
        """Report ``status`` and ``latency_ms`` for the health endpoint."""
        pass

    @abstractmethod
    async def create_collection(self, name: str, dimension: int) -> None:
        pass

    @abstractmethod
    async def collection_exists(self, name: str) -> bool:
        pass

    async def ensure_collection(self, name: str, dimension: int) -> None:
        """Create the collection unless it already exists."""
        if not await self.collection_exists(name):
            await self.create_collection(name=name, dimension=dimension)

    @abstractmethod
    async def insert(
        self,
        collection: str,
        ids: list[str],
        vectors: list[list[float]],
        payloads: Optional[list[dict[str, Any]]] = None,
    ) -> None:
        """Insert vectors into a collection, preserving input order."""
        pass

    @abstractmethod
    async def search(
        self,
        collection: str,
        query_vector: list[float],
        top_k: int = 10,
        filters: Optional[dict[str, Any]] = None,
    ) -> list[T]:
        """Most similar first. A collection that does not exist has no matches."""
        pass

    @abstractmethod
    async def count(
        self,
        collection: str,
        filters: Optional[dict[str, Any]] = None,
    ) -> int:
        pass

    @abstractmethod
    async def delete_by_source(self, collection: str, source: str) -> int:
        """Delete every vector whose payload ``source`` matches. Returns the count removed."""
        pass
