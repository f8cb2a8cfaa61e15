"""
Mansahay RAG - OpenAI Embeddings Provider
"""

from __future__ import annotations

import asyncio
from typing import Optional

from openai import AsyncOpenAI

from mansahay_rag.core.config import settings
from mansahay_rag.core.exceptions import EmbeddingError
from mansahay_rag.ingestion.embeddings.base import EmbeddingProvider, EmbeddingResult


class OpenAIEmbeddings(EmbeddingProvider):
    """
    OpenAI embeddings provider.

    Texts are sent in batches of ``batch_size``; each request is bounded by
    ``timeout`` on its own, so large uploads are limited only by how fast
    every single request returns. Failures surface as EmbeddingError
    without retrying; the caller decides whether to re-ingest.
    """

    MODEL_DIMENSIONS = {
        "text-embedding-3-large": 3072,
        "text-embedding-3-small": 1536,
        "text-embedding-ada-002": 1536,
    }

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        dimensions: Optional[int] = None,
        batch_size: Optional[int] = None,
        timeout: Optional[float] = None,
    ):
        self._api_key = api_key or settings.OPENAI_API_KEY
        self._model = model or settings.EMBEDDING_MODEL
        self._dimensions = dimensions or settings.EMBEDDING_DIMENSIONS
        self._batch_size = batch_size or settings.EMBEDDING_BATCH_SIZE
        self._timeout = timeout or settings.EXTERNAL_CALL_TIMEOUT_SECONDS
        self._client: Optional[AsyncOpenAI] = None

    def _get_client(self) -> AsyncOpenAI:
        """Get or create the OpenAI client."""
        if self._client is None:
            if not self._api_key:
                raise EmbeddingError("OpenAI API key not configured")
            self._client = AsyncOpenAI(api_key=self._api_key, max_retries=0)
        return self._client

    @property
    def dimensions(self) -> int:
        if self._dimensions:
            return self._dimensions
        return self.MODEL_DIMENSIONS.get(self._model, 1536)

    async def _create(self, client: AsyncOpenAI, batch: list[str], batch_start: int):
        kwargs = {"model": self._model, "input": batch}
        if self._model.startswith("text-embedding-3"):
            kwargs["dimensions"] = self.dimensions

        try:
            return await asyncio.wait_for(
                client.embeddings.create(**kwargs),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            self.logger.error(
                "Embedding request timed out",
                batch_start=batch_start,
                timeout=self._timeout,
            )
            raise EmbeddingError(
                f"Embedding request timed out after {self._timeout}s",
                details={"batch_start": batch_start, "batch_size": len(batch)},
            )
        except Exception as e:
            self.logger.error(
                "Embedding generation failed",
                error=str(e),
                batch_start=batch_start,
            )
            raise EmbeddingError(
                f"Failed to generate embeddings: {e}",
                details={"batch_start": batch_start, "batch_size": len(batch)},
            )

    async def embed_texts(self, texts: list[str]) -> EmbeddingResult:
        """Generate embeddings using the OpenAI API."""
        if not texts:
            return EmbeddingResult(embeddings=[])

        client = self._get_client()

        all_embeddings: list[list[float]] = []
        total_tokens = 0

        for i in range(0, len(texts), self._batch_size):
            batch = texts[i:i + self._batch_size]
            response = await self._create(client, batch, i)

            # The API may return items out of order
            batch_embeddings: list[Optional[list[float]]] = [None] * len(batch)
            for item in response.data:
                batch_embeddings[item.index] = item.embedding

            if any(e is None for e in batch_embeddings):
                raise EmbeddingError(
                    "Embedding response is missing vectors",
                    details={"batch_start": i, "batch_size": len(batch)},
                )

            all_embeddings.extend(batch_embeddings)
            if response.usage is not None:
                total_tokens += response.usage.total_tokens

            self.logger.debug(
                "Generated embeddings batch",
                batch_num=i // self._batch_size + 1,
                batch_size=len(batch),
            )

        self.logger.info(
            "Generated embeddings",
            num_texts=len(texts),
            total_tokens=total_tokens,
            model=self._model,
        )

        return EmbeddingResult(embeddings=all_embeddings, tokens_used=total_tokens)


# Singleton instance
_embedding_provider: Optional[OpenAIEmbeddings] = None


def get_embedding_provider() -> OpenAIEmbeddings:
    """Get the global embedding provider instance."""
    global _embedding_provider
    if _embedding_provider is None:
        _embedding_provider = OpenAIEmbeddings()
    return _embedding_provider
