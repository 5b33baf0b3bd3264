"""Tests for the generative text client.

Covers: provider selection, request shape per provider dialect, structured
JSON output with Pydantic validation, retry with exponential backoff, token
tracking. Network calls go through httpx.MockTransport.
"""

import json

import httpx
import pytest
from pydantic import BaseModel

from zawia.agents.llm_client import (
    ANTHROPIC_VERSION,
    LLMClient,
    LLMProvider,
    LLMRequest,
    TokenUsage,
)
from zawia.config.settings import Settings
from zawia.models.errors import ExternalServiceError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class MockOutput(BaseModel):
    expanded_post: str


def _chat_body(content: str, prompt_tokens: int = 12, completion_tokens: int = 30) -> dict:
    return {
        "choices": [{"message": {"role": "assistant", "content": content}}],
        "usage": {"prompt_tokens": prompt_tokens, "completion_tokens": completion_tokens},
    }


def _client(handler, **kwargs) -> LLMClient:
    kwargs.setdefault("gemini_key", "g-key")
    return LLMClient(transport=httpx.MockTransport(handler), base_delay=0.0, **kwargs)


REQUEST = LLMRequest(system_prompt="be creative", user_prompt="User's Idea: coffee")


# ===================================================================
# Provider selection
# ===================================================================


class TestProviderSelection:
    def test_no_keys_no_providers(self) -> None:
        client = LLMClient()
        assert client.available_providers() == []
        with pytest.raises(ExternalServiceError, match="No generative text provider"):
            client.select_provider()

    def test_preferred_provider_wins(self) -> None:
        client = LLMClient(gemini_key="g", anthropic_key="a", preferred=LLMProvider.ANTHROPIC)
        assert client.select_provider() == LLMProvider.ANTHROPIC

    def test_falls_back_to_configured_provider(self) -> None:
        client = LLMClient(openrouter_key="o", preferred=LLMProvider.GEMINI)
        assert client.select_provider() == LLMProvider.OPENROUTER

    def test_from_settings(self) -> None:
        settings = Settings(OPENAI_API_KEY="sk", LLM_PROVIDER="openai", LLM_MAX_RETRIES=1)
        client = LLMClient.from_settings(settings)
        assert client.select_provider() == LLMProvider.OPENAI
        assert client.max_retries == 1

    def test_from_settings_unknown_provider(self) -> None:
        settings = Settings(GEMINI_API_KEY="g", LLM_PROVIDER="bogus")
        assert LLMClient.from_settings(settings).preferred == LLMProvider.GEMINI


# ===================================================================
# Generation
# ===================================================================


class TestGenerate:
    @pytest.mark.anyio
    async def test_openai_compatible_call(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_chat_body("A great post #coffee"))

        client = _client(handler)
        response = await client.generate(REQUEST)

        assert response.content == "A great post #coffee"
        assert response.provider == LLMProvider.GEMINI
        assert response.usage.total_tokens == 42
        assert seen[0].headers["authorization"] == "Bearer g-key"
        payload = json.loads(seen[0].content)
        assert payload["messages"][0] == {"role": "system", "content": "be creative"}
        assert payload["messages"][1]["content"] == "User's Idea: coffee"

    @pytest.mark.anyio
    async def test_anthropic_messages_call(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={
                "content": [{"type": "text", "text": "Hello from Claude"}],
                "usage": {"input_tokens": 5, "output_tokens": 7},
            })

        client = _client(handler, gemini_key="", anthropic_key="a-key")
        response = await client.generate(REQUEST)

        assert response.content == "Hello from Claude"
        assert response.usage == TokenUsage(input_tokens=5, output_tokens=7)
        assert seen[0].url.path == "/v1/messages"
        assert seen[0].headers["x-api-key"] == "a-key"
        assert seen[0].headers["anthropic-version"] == ANTHROPIC_VERSION
        assert json.loads(seen[0].content)["system"] == "be creative"

    @pytest.mark.anyio
    async def test_model_override(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert json.loads(request.content)["model"] == "custom-model"
            return httpx.Response(200, json=_chat_body("ok"))

        response = await _client(handler, model="custom-model").generate(REQUEST)
        assert response.model == "custom-model"

    @pytest.mark.anyio
    async def test_retries_transient_status(self) -> None:
        statuses = iter([429, 503, 200])

        def handler(request: httpx.Request) -> httpx.Response:
            status = next(statuses)
            if status != 200:
                return httpx.Response(status)
            return httpx.Response(200, json=_chat_body("finally"))

        response = await _client(handler, max_retries=3).generate(REQUEST)
        assert response.content == "finally"

    @pytest.mark.anyio
    async def test_retries_exhausted(self) -> None:
        attempts = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal attempts
            attempts += 1
            return httpx.Response(503)

        with pytest.raises(ExternalServiceError, match="HTTP 503"):
            await _client(handler, max_retries=2).generate(REQUEST)
        assert attempts == 3

    @pytest.mark.anyio
    async def test_client_error_not_retried(self) -> None:
        attempts = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal attempts
            attempts += 1
            return httpx.Response(401, json={"error": "bad key"})

        with pytest.raises(ExternalServiceError, match="HTTP 401"):
            await _client(handler).generate(REQUEST)
        assert attempts == 1

    @pytest.mark.anyio
    async def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ExternalServiceError, match="unreachable"):
            await _client(handler, max_retries=1).generate(REQUEST)

    @pytest.mark.anyio
    async def test_unexpected_shape(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"choices": []})

        with pytest.raises(ExternalServiceError, match="response shape"):
            await _client(handler).generate(REQUEST)

    @pytest.mark.anyio
    async def test_empty_completion(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=_chat_body("   "))

        with pytest.raises(ExternalServiceError, match="empty completion"):
            await _client(handler).generate(REQUEST)


# ===================================================================
# Structured output parsing
# ===================================================================


class TestStructuredOutput:
    def test_parse_plain_json(self) -> None:
        parsed = LLMClient().parse_structured_output(
            raw='{"expanded_post": "Hi"}', schema=MockOutput,
        )
        assert parsed.expanded_post == "Hi"

    def test_parse_fenced_json(self) -> None:
        raw = 'Sure!\n```json\n{"expanded_post": "Hi"}\n```'
        parsed = LLMClient().parse_structured_output(raw=raw, schema=MockOutput)
        assert parsed.expanded_post == "Hi"

    def test_invalid_json(self) -> None:
        with pytest.raises(ExternalServiceError, match="Invalid JSON"):
            LLMClient().parse_structured_output(raw="not json", schema=MockOutput)

    def test_schema_mismatch(self) -> None:
        with pytest.raises(ExternalServiceError, match="Schema validation failed"):
            LLMClient().parse_structured_output(raw='{"other": 1}', schema=MockOutput)


# ===================================================================
# Backoff and usage tracking
# ===================================================================


class TestBackoffAndUsage:
    def test_backoff_delays(self) -> None:
        client = LLMClient(max_retries=3, base_delay=1.0)
        assert client.compute_backoff_delays() == [1.0, 2.0, 4.0]

    @pytest.mark.anyio
    async def test_usage_accumulates(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=_chat_body("ok", 10, 5))

        client = _client(handler)
        await client.generate(REQUEST)
        await client.generate(REQUEST)
        assert client.cumulative_usage().total_tokens == 30

        client.reset_usage()
        assert client.cumulative_usage().total_tokens == 0
