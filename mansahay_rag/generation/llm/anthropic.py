"""
Mansahay RAG - Anthropic (Claude) LLM Client
"""

from __future__ import annotations

from typing import Optional

from anthropic import AsyncAnthropic, RateLimitError
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from mansahay_rag.core.config import settings
from mansahay_rag.core.exceptions import LLMError, LLMRateLimitError
from mansahay_rag.generation.llm.base import LLMClient, LLMMessage, LLMResponse


class AnthropicClient(LLMClient):
    """Anthropic Claude LLM client."""

    provider = "anthropic"

    def __init__(
        self,
        api_key: Optional[str] = None,
        default_model: Optional[str] = None,
    ):
        self._api_key = api_key or settings.ANTHROPIC_API_KEY
        self._default_model = (
            default_model or settings.DEFAULT_LLM_MODEL or "claude-3-5-haiku-latest"
        )
        self._client: Optional[AsyncAnthropic] = None

    def _get_client(self) -> AsyncAnthropic:
        """Get or create the Anthropic client."""
        if self._client is None:
            if not self._api_key:
                raise LLMError(self.provider, "API key not configured")
            self._client = AsyncAnthropic(api_key=self._api_key)
        return self._client

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type(LLMRateLimitError),
        reraise=True,
    )
    async def generate(
        self,
        messages: list[LLMMessage],
        model: Optional[str] = None,
        temperature: float = 0.0,
        max_tokens: int = 1024,
    ) -> LLMResponse:
        """Generate a response using Claude."""
        client = self._get_client()
        model = model or self._default_model

        # System prompt travels outside the message list
        system = None
        api_messages = []
        for msg in messages:
            if msg.role == "system":
                system = msg.content
            else:
                api_messages.append({"role": msg.role, "content": msg.content})

        try:
            response = await client.messages.create(
                model=model,
                messages=api_messages,
                system=system or "",
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except RateLimitError:
            self.logger.warning("Anthropic rate limit hit", model=model)
            raise LLMRateLimitError(self.provider)
        except Exception as e:
            self.logger.error("Anthropic generation failed", error=str(e))
            raise LLMError(self.provider, str(e))

        content = "".join(
            block.text for block in response.content if hasattr(block, "text")
        )

        self.logger.info(
            "LLM generation complete",
            provider=self.provider,
            model=model,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
        )

        return LLMResponse(
            content=content,
            model=model,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
        )


# Singleton instance
_anthropic_client: Optional[AnthropicClient] = None


def get_anthropic_client() -> AnthropicClient:
    """Get the global Anthropic client instance."""
    global _anthropic_client
    if _anthropic_client is None:
        _anthropic_client = AnthropicClient()
    return _anthropic_client
