"""
Mansahay RAG - OpenAI LLM Client
"""

from typing import Optional

from openai import AsyncOpenAI, RateLimitError
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from mansahay_rag.core.config import settings
from mansahay_rag.core.exceptions import LLMError, LLMRateLimitError
from mansahay_rag.generation.llm.base import LLMClient, LLMMessage, LLMResponse


class OpenAIClient(LLMClient):
    """OpenAI chat completion client."""

    provider = "openai"

    def __init__(
        self,
        api_key: Optional[str] = None,
        default_model: Optional[str] = None,
    ):
        self._api_key = api_key or settings.OPENAI_API_KEY
        self._default_model = default_model or settings.DEFAULT_LLM_MODEL or "gpt-4o-mini"
        self._client: Optional[AsyncOpenAI] = None

    def _get_client(self) -> AsyncOpenAI:
        """Get or create the OpenAI client."""
        if self._client is None:
            if not self._api_key:
                raise LLMError(self.provider, "API key not configured")
            self._client = AsyncOpenAI(api_key=self._api_key)
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
        """Generate a response using a GPT chat model."""
        client = self._get_client()
        model = model or self._default_model

        api_messages = [
            {"role": msg.role, "content": msg.content}
            for msg in messages
        ]

        try:
            response = await client.chat.completions.create(
                model=model,
                messages=api_messages,
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except RateLimitError:
            self.logger.warning("OpenAI rate limit hit", model=model)
            raise LLMRateLimitError(self.provider)
        except Exception as e:
            self.logger.error("OpenAI generation failed", error=str(e))
            raise LLMError(self.provider, str(e))

        choice = response.choices[0]
        usage = response.usage

        self.logger.info(
            "LLM generation complete",
            provider=self.provider,
            model=model,
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
        )

        return LLMResponse(
            content=choice.message.content or "",
            model=model,
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
        )


# Singleton instance
_openai_client: Optional[OpenAIClient] = None


def get_openai_client() -> OpenAIClient:
    """Get the global OpenAI client instance."""
    global _openai_client
    if _openai_client is None:
        _openai_client = OpenAIClient()
    return _openai_client
