"""OpenAI provider implementation."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from openai import OpenAI

from qa2table.agent.base import BaseLLMProvider, LLMResponse
from qa2table.utils.logging import get_logger

logger = get_logger(__name__)

CLIENT_KEYS = {"api_key", "base_url", "organization", "project", "timeout", "max_retries"}
GENERATION_KEYS = {"temperature", "max_tokens", "top_p", "seed", "n"}


class OpenAIProvider(BaseLLMProvider):
    """OpenAI chat completions provider."""

    def __init__(
        self,
        model: str = "gpt-4-1106-preview",
        api_key: Optional[str] = None,
        **kwargs: Any,
    ):
        """Initialize OpenAI provider.

        Args:
            model: Model name (e.g., 'gpt-4-1106-preview', 'gpt-3.5-turbo-1106')
            api_key: OpenAI API key (falls back to the OPENAI_API_KEY env var)
            **kwargs: Client options and generation defaults
        """
        super().__init__(model, **kwargs)

        client_kwargs: Dict[str, Any] = {
            k: v for k, v in kwargs.items() if k in CLIENT_KEYS
        }
        if api_key:
            client_kwargs["api_key"] = api_key
        else:
            logger.info(
                "OpenAI api_key not provided via config; falling back to OPENAI_API_KEY env var if set"
            )

        self.client = OpenAI(**client_kwargs)

    def _generation_kwargs(
        self,
        temperature: Optional[float],
        max_tokens: Optional[int],
        response_format: Optional[str],
        extra: Dict[str, Any],
    ) -> Dict[str, Any]:
        merged: Dict[str, Any] = {
            k: v for k, v in self.config.items() if k in GENERATION_KEYS and v is not None
        }
        # Call-time args override defaults
        if temperature is not None:
            merged["temperature"] = temperature
        if max_tokens is not None:
            merged["max_tokens"] = max_tokens
        merged.update({k: v for k, v in extra.items() if v is not None})

        if response_format == "json":
            merged["response_format"] = {"type": "json_object"}
        return merged

    def chat(
        self,
        messages: List[Dict[str, str]],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        response_format: Optional[str] = None,
        model: Optional[str] = None,
        **kwargs: Any,
    ) -> LLMResponse:
        """Chat completion returning the first choice.

        ``model`` overrides the provider model for this call only.
        """
        model = model or self.model
        response = self.client.chat.completions.create(
            model=model,
            messages=messages,
            **self._generation_kwargs(temperature, max_tokens, response_format, kwargs),
        )

        usage = {
            "prompt_tokens": response.usage.prompt_tokens if response.usage else 0,
            "completion_tokens": (
                response.usage.completion_tokens if response.usage else 0
            ),
            "total_tokens": response.usage.total_tokens if response.usage else 0,
        }

        if not response.choices:
            return LLMResponse(content=None, model=model, usage=usage)

        choice = response.choices[0]
        return LLMResponse(
            content=choice.message.content,
            model=model,
            usage=usage,
            metadata={"finish_reason": choice.finish_reason},
        )
