"""Generative text client.

Unified interface for Gemini/OpenAI/OpenRouter/Anthropic with:
- Provider selection from configured API keys (preferred provider first)
- Structured JSON output with Pydantic validation
- Retry with exponential backoff on rate limits, 5xx and transport errors
- Token usage tracking

Gemini, OpenAI and OpenRouter all speak the OpenAI chat-completions
dialect; Anthropic uses its Messages API. Every failure that survives the
retries surfaces as ExternalServiceError.
"""

import asyncio
import json
import logging
import re
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel

from zawia.config.settings import Settings
from zawia.models.errors import ExternalServiceError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


# ---------------------------------------------------------------------------
# Provider enum
# ---------------------------------------------------------------------------


class LLMProvider(StrEnum):
    """Supported generative text providers."""

    GEMINI = "GEMINI"
    OPENAI = "OPENAI"
    OPENROUTER = "OPENROUTER"
    ANTHROPIC = "ANTHROPIC"


_ENDPOINTS: dict[LLMProvider, str] = {
    LLMProvider.GEMINI: "https://generativelanguage.googleapis.com/v1beta/openai/chat/completions",
    LLMProvider.OPENAI: "https://api.openai.com/v1/chat/completions",
    LLMProvider.OPENROUTER: "https://openrouter.ai/api/v1/chat/completions",
    LLMProvider.ANTHROPIC: "https://api.anthropic.com/v1/messages",
}

_DEFAULT_MODELS: dict[LLMProvider, str] = {
    LLMProvider.GEMINI: "gemini-2.5-flash",
    LLMProvider.OPENAI: "gpt-4o-mini",
    LLMProvider.OPENROUTER: "google/gemini-2.5-flash",
    LLMProvider.ANTHROPIC: "claude-3-5-haiku-latest",
}

ANTHROPIC_VERSION = "2023-06-01"

_RETRYABLE_STATUS = frozenset({408, 429, 500, 502, 503, 504})


# ---------------------------------------------------------------------------
# Token tracking
# ---------------------------------------------------------------------------


@dataclass
class TokenUsage:
    """Token usage for a single call."""

    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


# ---------------------------------------------------------------------------
# Request / Response
# ---------------------------------------------------------------------------


@dataclass
class LLMRequest:
    """Text generation request."""

    system_prompt: str
    user_prompt: str
    max_tokens: int = 1024
    temperature: float = 0.7


@dataclass
class LLMResponse:
    """Text generation response."""

    content: str
    provider: LLMProvider
    model: str
    usage: TokenUsage


# ---------------------------------------------------------------------------
# JSON extraction helpers
# ---------------------------------------------------------------------------

_JSON_BLOCK_RE = re.compile(r"```(?:json)?\s*\n?(.*?)\n?```", re.DOTALL)


def _extract_json(raw: str) -> str:
    """Extract JSON from raw model output, stripping markdown fences."""
    match = _JSON_BLOCK_RE.search(raw)
    if match:
        return match.group(1).strip()
    return raw.strip()


# ---------------------------------------------------------------------------
# LLM client
# ---------------------------------------------------------------------------


class LLMClient:
    """Unified generative text client with retry and usage tracking."""

    def __init__(
        self,
        *,
        gemini_key: str = "",
        openai_key: str = "",
        openrouter_key: str = "",
        anthropic_key: str = "",
        preferred: LLMProvider = LLMProvider.GEMINI,
        model: str = "",
        max_retries: int = 3,
        base_delay: float = 1.0,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._keys = {
            LLMProvider.GEMINI: gemini_key,
            LLMProvider.OPENAI: openai_key,
            LLMProvider.OPENROUTER: openrouter_key,
            LLMProvider.ANTHROPIC: anthropic_key,
        }
        self.preferred = preferred
        self.model = model
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.timeout = timeout
        self._transport = transport
        self._usage_log: list[TokenUsage] = []

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "LLMClient":
        try:
            preferred = LLMProvider(settings.LLM_PROVIDER.upper())
        except ValueError:
            logger.warning("Unknown LLM_PROVIDER %r, using GEMINI", settings.LLM_PROVIDER)
            preferred = LLMProvider.GEMINI
        return cls(
            gemini_key=settings.GEMINI_API_KEY,
            openai_key=settings.OPENAI_API_KEY,
            openrouter_key=settings.OPENROUTER_API_KEY,
            anthropic_key=settings.ANTHROPIC_API_KEY,
            preferred=preferred,
            model=settings.LLM_MODEL,
            max_retries=settings.LLM_MAX_RETRIES,
            timeout=settings.LLM_TIMEOUT_S,
            transport=transport,
        )

    # ----- Structured output parsing -----

    def parse_structured_output(self, *, raw: str, schema: type[T]) -> T:
        """Parse raw model output into a validated Pydantic model.

        Raises ExternalServiceError if JSON is invalid or fails schema validation.
        """
        cleaned = _extract_json(raw)
        try:
            data = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise ExternalServiceError(f"Invalid JSON from model: {exc}") from exc
        try:
            return schema.model_validate(data)
        except ValueError as exc:
            raise ExternalServiceError(f"Schema validation failed: {exc}") from exc

    # ----- Provider availability -----

    def available_providers(self) -> list[LLMProvider]:
        """Return list of providers with API keys."""
        return [provider for provider, key in self._keys.items() if key]

    def select_provider(self) -> LLMProvider:
        """Preferred provider if configured, else the first configured one."""
        available = self.available_providers()
        if not available:
            raise ExternalServiceError("No generative text provider is configured.")
        if self.preferred in available:
            return self.preferred
        return available[0]

    # ----- Retry / backoff -----

    def compute_backoff_delays(self) -> list[float]:
        """Compute exponential backoff delays for retries."""
        return [self.base_delay * (2**i) for i in range(self.max_retries)]

    # ----- Generation -----

    async def generate(self, request: LLMRequest) -> LLMResponse:
        """Run one generation, retrying transient failures."""
        provider = self.select_provider()
        model = self.model or _DEFAULT_MODELS[provider]
        url, headers, payload = self._build_call(provider, model, request)
        delays = self.compute_backoff_delays()

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            for attempt in range(len(delays) + 1):
                try:
                    resp = await client.post(url, headers=headers, json=payload)
                    resp.raise_for_status()
                    body = resp.json()
                except httpx.HTTPStatusError as exc:
                    status = exc.response.status_code
                    if status not in _RETRYABLE_STATUS or attempt == len(delays):
                        raise ExternalServiceError(
                            f"{provider} returned HTTP {status}."
                        ) from exc
                    logger.warning("%s HTTP %d, retrying (%d/%d)", provider, status, attempt + 1, len(delays))
                except httpx.TransportError as exc:
                    if attempt == len(delays):
                        raise ExternalServiceError(f"{provider} unreachable: {exc}") from exc
                    logger.warning("%s transport error, retrying (%d/%d): %s", provider, attempt + 1, len(delays), exc)
                except ValueError as exc:
                    raise ExternalServiceError(f"{provider} returned invalid JSON.") from exc
                else:
                    content, usage = self._parse_body(provider, body)
                    self.record_usage(usage)
                    return LLMResponse(content=content, provider=provider, model=model, usage=usage)
                await asyncio.sleep(delays[attempt])

        raise ExternalServiceError(f"{provider} failed after {len(delays) + 1} attempts.")

    def _build_call(
        self, provider: LLMProvider, model: str, request: LLMRequest,
    ) -> tuple[str, dict[str, str], dict[str, Any]]:
        key = self._keys[provider]
        if provider == LLMProvider.ANTHROPIC:
            headers = {
                "x-api-key": key,
                "anthropic-version": ANTHROPIC_VERSION,
                "content-type": "application/json",
            }
            payload: dict[str, Any] = {
                "model": model,
                "max_tokens": request.max_tokens,
                "temperature": request.temperature,
                "system": request.system_prompt,
                "messages": [{"role": "user", "content": request.user_prompt}],
            }
        else:
            headers = {"Authorization": f"Bearer {key}", "Content-Type": "application/json"}
            messages = []
            if request.system_prompt:
                messages.append({"role": "system", "content": request.system_prompt})
            messages.append({"role": "user", "content": request.user_prompt})
            payload = {
                "model": model,
                "max_tokens": request.max_tokens,
                "temperature": request.temperature,
                "messages": messages,
            }
        return _ENDPOINTS[provider], headers, payload

    @staticmethod
    def _parse_body(provider: LLMProvider, body: dict[str, Any]) -> tuple[str, TokenUsage]:
        try:
            if provider == LLMProvider.ANTHROPIC:
                content = "".join(
                    block["text"] for block in body["content"] if block.get("type") == "text"
                )
                raw_usage = body.get("usage") or {}
                usage = TokenUsage(
                    input_tokens=raw_usage.get("input_tokens", 0),
                    output_tokens=raw_usage.get("output_tokens", 0),
                )
            else:
                content = body["choices"][0]["message"]["content"] or ""
                raw_usage = body.get("usage") or {}
                usage = TokenUsage(
                    input_tokens=raw_usage.get("prompt_tokens", 0),
                    output_tokens=raw_usage.get("completion_tokens", 0),
                )
        except (KeyError, IndexError, TypeError) as exc:
            raise ExternalServiceError(f"Unexpected {provider} response shape.") from exc
        if not content.strip():
            raise ExternalServiceError(f"{provider} returned an empty completion.")
        return content, usage

    # ----- Token tracking -----

    def record_usage(self, usage: TokenUsage) -> None:
        """Record token usage from a call."""
        self._usage_log.append(usage)

    def cumulative_usage(self) -> TokenUsage:
        """Return cumulative token usage across all recorded calls."""
        total_in = sum(u.input_tokens for u in self._usage_log)
        total_out = sum(u.output_tokens for u in self._usage_log)
        return TokenUsage(input_tokens=total_in, output_tokens=total_out)

    def reset_usage(self) -> None:
        """Reset cumulative token usage."""
        self._usage_log.clear()
