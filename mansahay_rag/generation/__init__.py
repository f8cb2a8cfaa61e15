"""
Mansahay RAG - Generation Module

LLM clients used for query expansion.
"""

from mansahay_rag.generation.llm import (
    LLMClient,
    LLMMessage,
    LLMResponse,
    get_llm_client,
    get_default_llm_client,
)

__all__ = [
    "LLMClient",
    "LLMMessage",
    "LLMResponse",
    "get_llm_client",
    "get_default_llm_client",
]
