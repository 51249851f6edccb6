"""Agent module: chat-completion providers used for QA pair generation."""

from __future__ import annotations

from qa2table.agent.base import BaseLLMProvider, LLMResponse
from qa2table.agent.factory import LLMProviderFactory

__all__ = [
    "BaseLLMProvider",
    "LLMProviderFactory",
    "LLMResponse",
]
