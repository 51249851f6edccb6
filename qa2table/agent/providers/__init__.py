"""LLM provider implementations."""

from __future__ import annotations

from qa2table.agent.providers.openai import OpenAIProvider

__all__ = [
    "OpenAIProvider",
]

PROVIDER_REGISTRY = {
    "openai": OpenAIProvider,
}
