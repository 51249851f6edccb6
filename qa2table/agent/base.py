"""Base classes for LLM agent providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from qa2table.utils.logging import get_logger

logger = get_logger(__name__)


class LLMResponse:
    """Response from LLM provider."""

    def __init__(
        self,
        content: Optional[str],
        model: str,
        usage: Optional[Dict[str, Any]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        """Initialize LLM response.

        Args:
            content: Content of the first choice; None when the service sent none
            model: Model name used
            usage: Token usage information (prompt_tokens, completion_tokens, total_tokens)
            metadata: Additional metadata from the provider
        """
        self.content = content
        self.model = model
        self.usage = usage or {}
        self.metadata = metadata or {}

    def __str__(self) -> str:
        return self.content or ""

    def __repr__(self) -> str:
        preview = (self.content or "")[:50]
        return f"LLMResponse(content={preview}..., model={self.model}, usage={self.usage})"


class BaseLLMProvider(ABC):
    """Abstract base class for chat-completion providers."""

    def __init__(self, model: str, **kwargs: Any):
        """Initialize LLM provider.

        Args:
            model: Model identifier/name
            **kwargs: Provider-specific configuration
        """
        self.model = model
        self.config = kwargs
        self.logger = get_logger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    def chat(
        self,
        messages: List[Dict[str, str]],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        response_format: Optional[str] = None,
        model: Optional[str] = None,
        **kwargs: Any,
    ) -> LLMResponse:
        """Chat completion with role-tagged messages.

        Args:
            messages: List of message dicts with 'role' and 'content' keys
            temperature: Sampling temperature; provider default when None
            max_tokens: Maximum tokens to generate
            response_format: "json" for JSON-object mode, None for text
            model: Model for this call; the provider model when None
            **kwargs: Provider-specific parameters (e.g. ``n``)

        Returns:
            LLMResponse holding the first choice
        """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(model={self.model})"
