"""
Mansahay RAG - Query Expansion
"""

from __future__ import annotations

import asyncio
import re
from typing import Optional

from mansahay_rag.core.config import settings
from mansahay_rag.core.exceptions import ExpansionError, RAGException
from mansahay_rag.core.logging import LoggerMixin
from mansahay_rag.generation.llm import LLMClient, LLMMessage, get_default_llm_client

# "1.", "2)", "-", "*", "•" at the start of a line
_ENUMERATION = re.compile(r"^\s*(?:\d+[.)]|[-*•])\s*")


class QueryExpander(LoggerMixin):
    """
    Rewrites a user question into alternative search queries.

    The expansions capture different semantic angles of the same question;
    the caller decides how to combine them with the original.
    """

    EXPANSION_PROMPT = """You are a helpful AI assistant. Generate {num_variations} different search queries based on the user question to retrieve relevant documents from a vector database.
User Question: "{query}"
Output only the {num_variations} queries separated by newlines. No numbering."""

    def __init__(
        self,
        llm_client: Optional[LLMClient] = None,
        num_expansions: Optional[int] = None,
        timeout: Optional[float] = None,
    ):
        self._llm = llm_client
        self.num_expansions = num_expansions or settings.QUERY_EXPANSIONS
        self.timeout = timeout or settings.EXTERNAL_CALL_TIMEOUT_SECONDS

    @property
    def llm(self) -> LLMClient:
        if self._llm is None:
            self._llm = get_default_llm_client()
        return self._llm

    async def expand(self, query: str, n: Optional[int] = None) -> list[str]:
        """
        Generate alternative phrasings of a query.

        Args:
            query: Original user question
            n: Number of expansions to request

        Returns:
            Expansions in model order, excluding the original. The model may
            return more or fewer than requested.

        Raises:
            ExpansionError: If the LLM fails, times out, or returns no usable lines
        """
        n = n or self.num_expansions
        prompt = self.EXPANSION_PROMPT.format(num_variations=n, query=query)

        try:
            response = await asyncio.wait_for(
                self.llm.generate(
                    messages=[LLMMessage(role="user", content=prompt)],
                    temperature=0.7,
                    max_tokens=500,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            raise ExpansionError(query, f"timed out after {self.timeout}s")
        except RAGException as e:
            raise ExpansionError(query, e.message)

        expansions = self.parse_expansions(response.content, query)
        if not expansions:
            raise ExpansionError(query, "no usable lines in model output")

        self.logger.debug(
            "Expanded query",
            query_length=len(query),
            requested=n,
            num_expansions=len(expansions),
        )
        return expansions

    @staticmethod
    def parse_expansions(text: str, query: str) -> list[str]:
        """Split model output into one query per line."""
        expansions = []
        for line in text.splitlines():
            line = _ENUMERATION.sub("", line).strip().strip('"').strip()
            if not line or line == query.strip():
                continue
            expansions.append(line)
        return expansions
