"""
Thin adapter layer over LLM provider SDKs (OpenAI, Anthropic).

Each provider exposes the same interface so callers never import
provider-specific code. Calls use the SDK's default transport timeout;
nothing here retries.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict

logger = logging.getLogger(__name__)


class BaseLLMProvider(ABC):
    """Common interface that every concrete provider implements."""

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        *,
        temperature: float = 0.3,
        model: str | None = None,
        max_tokens: int = 1024,
    ) -> str:
        ...


# ═══════════════════════════════════════════════════════════════════════════════
# OpenAI
# ═══════════════════════════════════════════════════════════════════════════════


class OpenAIProvider(BaseLLMProvider):
    def __init__(self, api_key: str, default_model: str = "gpt-4o-mini"):
        from openai import AsyncOpenAI

        self.client = AsyncOpenAI(api_key=api_key, max_retries=0)
        self.default_model = default_model

    async def generate(
        self,
        prompt: str,
        *,
        temperature: float = 0.3,
        model: str | None = None,
        max_tokens: int = 1024,
    ) -> str:
        model = model or self.default_model

        response = await self.client.chat.completions.create(
            model=model,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
            max_tokens=max_tokens,
        )
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""


# ═══════════════════════════════════════════════════════════════════════════════
# Anthropic
# ═══════════════════════════════════════════════════════════════════════════════


class AnthropicProvider(BaseLLMProvider):
    def __init__(self, api_key: str, default_model: str = "claude-3-5-haiku-latest"):
        from anthropic import AsyncAnthropic

        self.client = AsyncAnthropic(api_key=api_key, max_retries=0)
        self.default_model = default_model

    async def generate(
        self,
        prompt: str,
        *,
        temperature: float = 0.3,
        model: str | None = None,
        max_tokens: int = 1024,
    ) -> str:
        model = model or self.default_model

        response = await self.client.messages.create(
            model=model,
            max_tokens=max_tokens,
            temperature=temperature,
            messages=[{"role": "user", "content": prompt}],
        )
        return "".join(
            block.text for block in response.content if getattr(block, "type", "") == "text"
        )


# ═══════════════════════════════════════════════════════════════════════════════
# Factory
# ═══════════════════════════════════════════════════════════════════════════════

_PROVIDERS: Dict[str, Any] = {
    "openai": OpenAIProvider,
    "anthropic": AnthropicProvider,
}


def get_llm_provider(
    provider_name: str,
    *,
    api_key: str,
    default_model: str | None = None,
) -> BaseLLMProvider:
    """
    Build an LLM provider instance.

    Parameters
    ----------
    provider_name : "openai" | "anthropic"
    api_key       : credential for the provider.
    default_model : override the default model for this provider instance.
    """
    try:
        provider_cls = _PROVIDERS[provider_name]
    except KeyError:
        raise ValueError(f"Unsupported LLM provider: {provider_name}") from None

    if default_model:
        return provider_cls(api_key=api_key, default_model=default_model)
    return provider_cls(api_key=api_key)
