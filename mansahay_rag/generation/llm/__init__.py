"""
Mansahay RAG - LLM Module
"""

from __future__ import annotations

from mansahay_rag.generation.llm.base import LLMClient, LLMMessage, LLMResponse
from mansahay_rag.generation.llm.anthropic import AnthropicClient, get_anthropic_client
from mansahay_rag.generation.llm.openai import OpenAIClient, get_openai_client
from mansahay_rag.generation.llm.factory import (
    get_llm_client,
    get_default_llm_client,
    reset_llm_client,
)

__all__ = [
    # Base
    "LLMClient",
    "LLMMessage",
    "LLMResponse",
    # Anthropic
    "AnthropicClient",
    "get_anthropic_client",
    # OpenAI
    "OpenAIClient",
    "get_openai_client",
    # Factory
    "get_llm_client",
    "get_default_llm_client",
    "reset_llm_client",
]
