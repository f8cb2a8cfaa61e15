"""
Mansahay RAG - LLM Client Base Classes
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from mansahay_rag.core.logging import LoggerMixin


@dataclass
class LLMMessage:
    role: str  # "system", "user", "assistant"
    content: str


@dataclass
class LLMResponse:
    """Generated text plus the token usage reported by the provider."""
    content: str
    model: str
    input_tokens: int = 0
    output_tokens: int = 0


class LLMClient(ABC, LoggerMixin):
    """
    Single-shot chat completion, used to rewrite search queries.

    Implementations raise LLMRateLimitError when throttled (and retry on
    it), LLMError for any other provider failure.
    """

    provider: str = ""

    @abstractmethod
    async def generate(
        self,
        messages: list[LLMMessage],
        model: Optional[str] = None,
        temperature: float = 0.0,
        max_tokens: int = 1024,
    ) -> LLMResponse:
        """
        Generate a completion for the conversation.

        Args:
            messages: Conversation so far; a "system" message sets instructions
            model: Model to use (defaults to the client's model)
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate
        """
        pass
