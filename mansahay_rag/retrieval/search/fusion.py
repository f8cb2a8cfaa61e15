"""
Mansahay RAG - Multi-Query Fusion Search

Runs the original question and its LLM expansions against the vector
store in parallel and merges the ranked lists with Reciprocal Rank Fusion.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any, Optional, Sequence

from mansahay_rag.core.config import settings
from mansahay_rag.core.exceptions import ExpansionError, ValidationError, VectorStoreError
from mansahay_rag.core.logging import LoggerMixin
from mansahay_rag.core.types import FusedResult, FusionSearchResult, SearchResult
from mansahay_rag.retrieval.query import QueryExpander
from mansahay_rag.retrieval.search.vector import VectorSearcher


def reciprocal_rank_fusion(
    result_lists: Sequence[Sequence[SearchResult]],
    k: int = 60,
) -> list[FusedResult]:
    """
    Fuse ranked lists using Reciprocal Rank Fusion.

    RRF score = Σ 1/(k + rank + 1), rank 0-based, summed over every list
    a chunk appears in. Chunks are identified by (source, location_start).
    Equal scores keep first-appearance order, so the output is a pure
    function of the input lists.
    """
    scores: dict[tuple[str, int], float] = {}
    fused: dict[tuple[str, int], FusedResult] = {}

    for results in result_lists:
        for rank, result in enumerate(results):
            key = result.identity
            contribution = 1.0 / (k + rank + 1)
            if key in fused:
                scores[key] += contribution
                fused[key].appearances += 1
            else:
                scores[key] = contribution
                fused[key] = FusedResult(chunk=result.chunk, score=0.0)

    for key, entry in fused.items():
        entry.score = scores[key]

    # sorted() is stable; dict order is first appearance
    return sorted(fused.values(), key=lambda r: r.score, reverse=True)


def _default(value, fallback):
    # An explicit 0 is kept
    return fallback if value is None else value


class FusionSearchEngine(LoggerMixin):
    """
    Query expansion plus parallel vector search plus RRF.

    Every variant search is settled independently. A failed or timed-out
    variant contributes an empty list and is reported in
    ``failed_variants``; only when every variant fails is the search
    itself failed.
    """

    def __init__(
        self,
        searcher: Optional[VectorSearcher] = None,
        expander: Optional[QueryExpander] = None,
        per_variant_top_k: Optional[int] = None,
        top_k: Optional[int] = None,
        rrf_k: Optional[int] = None,
        timeout: Optional[float] = None,
    ):
        self.searcher = searcher or VectorSearcher()
        self.expander = expander or QueryExpander()
        self.per_variant_top_k = _default(per_variant_top_k, settings.PER_VARIANT_TOP_K)
        self.top_k = _default(top_k, settings.SEARCH_TOP_K)
        self.rrf_k = _default(rrf_k, settings.RRF_K)
        self.timeout = _default(timeout, settings.EXTERNAL_CALL_TIMEOUT_SECONDS)

    async def search(
        self,
        query: Any,
        top_k: Optional[int] = None,
        collection: Optional[str] = None,
    ) -> FusionSearchResult:
        """
        Search with query expansion and Reciprocal Rank Fusion.

        Args:
            query: User question; must be a non-empty string
            top_k: Maximum number of fused results
            collection: Collection to search

        Returns:
            FusionSearchResult with the variants used and the fused ranking

        Raises:
            ValidationError: If query is empty or not a string
            VectorStoreError: If every variant search failed
        """
        if not isinstance(query, str) or not query.strip():
            raise ValidationError("Query required", field="query")

        start_time = time.perf_counter()
        if top_k is None:
            top_k = self.top_k

        variants = [query] + await self._expand(query)

        outcomes = await asyncio.gather(
            *(self._search_variant(v, collection) for v in variants),
            return_exceptions=True,
        )

        result_lists: list[list[SearchResult]] = []
        failed: list[str] = []
        for variant, outcome in zip(variants, outcomes):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                self.logger.warning(
                    "Variant search failed",
                    variant_length=len(variant),
                    error=str(outcome) or type(outcome).__name__,
                )
                failed.append(variant)
                result_lists.append([])
            else:
                result_lists.append(outcome)

        if len(failed) == len(variants):
            self.logger.error("All variant searches failed", variants=len(variants))
            raise VectorStoreError(
                "Vector search failed for every query variant",
                details={"variants": len(variants)},
            )

        fused = reciprocal_rank_fusion(result_lists, k=self.rrf_k)[:top_k]
        latency_ms = (time.perf_counter() - start_time) * 1000

        self.logger.info(
            "Fusion search completed",
            query_length=len(query),
            variants=len(variants),
            failed_variants=len(failed),
            fused_results=len(fused),
            latency_ms=round(latency_ms, 2),
        )

        return FusionSearchResult(
            query=query,
            variants=variants,
            results=fused,
            failed_variants=failed,
            latency_ms=latency_ms,
        )

    async def _expand(self, query: str) -> list[str]:
        try:
            return await self.expander.expand(query)
        except ExpansionError as e:
            self.logger.warning("Query expansion failed, using original query", error=e.message)
            return []

    async def _search_variant(
        self,
        variant: str,
        collection: Optional[str],
    ) -> list[SearchResult]:
        return await asyncio.wait_for(
            self.searcher.similarity_search(variant, self.per_variant_top_k, collection),
            timeout=self.timeout,
        )


# Singleton instance
_search_engine: Optional[FusionSearchEngine] = None


def get_search_engine() -> FusionSearchEngine:
    """Get the global fusion search engine instance."""
    global _search_engine
    if _search_engine is None:
        _search_engine = FusionSearchEngine()
    return _search_engine
