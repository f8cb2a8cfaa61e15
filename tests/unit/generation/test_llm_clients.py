"""
Tests for mansahay_rag/generation/llm/
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from mansahay_rag.core.exceptions import ConfigurationError, LLMError, LLMRateLimitError
from mansahay_rag.generation.llm import (
    AnthropicClient,
    LLMMessage,
    OpenAIClient,
    get_llm_client,
    reset_llm_client,
)


def openai_response(content="rephrased query"):
    return MagicMock(
        id="chatcmpl-1",
        choices=[MagicMock(message=MagicMock(content=content), finish_reason="stop")],
        usage=MagicMock(prompt_tokens=12, completion_tokens=5),
    )


class TestOpenAIClient:

    @pytest.mark.asyncio
    async def test_generate(self):
        client = OpenAIClient(api_key="sk-test", default_model="gpt-4o-mini")
        sdk = MagicMock()
        sdk.chat.completions.create = AsyncMock(return_value=openai_response())
        client._client = sdk

        response = await client.generate([LLMMessage(role="user", content="hi")])

        assert response.content == "rephrased query"
        assert (response.input_tokens, response.output_tokens) == (12, 5)
        assert sdk.chat.completions.create.await_args.kwargs["model"] == "gpt-4o-mini"

    @pytest.mark.asyncio
    async def test_system_message_passed_through(self):
        client = OpenAIClient(api_key="sk-test")
        sdk = MagicMock()
        sdk.chat.completions.create = AsyncMock(return_value=openai_response("ok"))
        client._client = sdk

        response = await client.generate(
            [LLMMessage(role="system", content="be brief"), LLMMessage(role="user", content="question")],
            temperature=0.7,
        )

        assert response.content == "ok"
        kwargs = sdk.chat.completions.create.await_args.kwargs
        assert kwargs["messages"] == [
            {"role": "system", "content": "be brief"},
            {"role": "user", "content": "question"},
        ]
        assert kwargs["temperature"] == 0.7

    @pytest.mark.asyncio
    async def test_provider_failure_raises_llm_error(self):
        client = OpenAIClient(api_key="sk-test")
        sdk = MagicMock()
        sdk.chat.completions.create = AsyncMock(side_effect=RuntimeError("500"))
        client._client = sdk

        with pytest.raises(LLMError):
            await client.generate([LLMMessage(role="user", content="hi")])

        assert sdk.chat.completions.create.await_count == 1

    @pytest.mark.asyncio
    async def test_rate_limit_retried(self):
        from openai import RateLimitError

        client = OpenAIClient(api_key="sk-test")
        sdk = MagicMock()
        rate_limited = RateLimitError(
            "slow down",
            response=MagicMock(status_code=429, headers={}),
            body=None,
        )
        sdk.chat.completions.create = AsyncMock(side_effect=[rate_limited, openai_response("ok")])
        client._client = sdk

        with patch("asyncio.sleep", new_callable=AsyncMock):
            response = await client.generate([LLMMessage(role="user", content="hi")])

        assert response.content == "ok"
        assert sdk.chat.completions.create.await_count == 2

    def test_missing_api_key(self):
        client = OpenAIClient(api_key=None)
        client._api_key = None

        with pytest.raises(LLMError):
            client._get_client()


class TestAnthropicClient:

    @pytest.mark.asyncio
    async def test_system_prompt_split_out(self):
        client = AnthropicClient(api_key="sk-ant-test", default_model="claude-test")
        sdk = MagicMock()
        sdk.messages.create = AsyncMock(return_value=MagicMock(
            id="msg_1",
            content=[MagicMock(text="one"), MagicMock(text=" two")],
            usage=MagicMock(input_tokens=10, output_tokens=3),
            stop_reason="end_turn",
        ))
        client._client = sdk

        response = await client.generate([
            LLMMessage(role="system", content="rules"),
            LLMMessage(role="user", content="hi"),
        ])

        assert response.content == "one two"
        kwargs = sdk.messages.create.await_args.kwargs
        assert kwargs["system"] == "rules"
        assert kwargs["messages"] == [{"role": "user", "content": "hi"}]

    @pytest.mark.asyncio
    async def test_provider_failure(self):
        client = AnthropicClient(api_key="sk-ant-test")
        sdk = MagicMock()
        sdk.messages.create = AsyncMock(side_effect=RuntimeError("overloaded"))
        client._client = sdk

        with pytest.raises(LLMError):
            await client.generate([LLMMessage(role="user", content="hi")])


class TestFactory:

    def teardown_method(self):
        reset_llm_client()

    def test_openai(self):
        assert isinstance(get_llm_client("openai"), OpenAIClient)

    def test_anthropic(self):
        assert isinstance(get_llm_client("Anthropic"), AnthropicClient)

    def test_unknown_provider(self):
        with pytest.raises(ConfigurationError):
            get_llm_client("gemini")

    def test_rate_limit_error_type(self):
        assert issubclass(LLMRateLimitError, LLMError)
