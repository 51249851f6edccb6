"""Factory for creating LLM provider instances."""

from __future__ import annotations

from typing import Any, Dict, Optional

from qa2table.agent.base import BaseLLMProvider
from qa2table.agent.providers import PROVIDER_REGISTRY
from qa2table.utils.logging import get_logger

logger = get_logger(__name__)


class LLMProviderFactory:
    """Factory for creating LLM provider instances."""

    @staticmethod
    def create_provider(
        provider: str,
        model: Optional[str] = None,
        **kwargs: Any,
    ) -> BaseLLMProvider:
        """Create an LLM provider instance.

        Args:
            provider: Provider name (e.g., 'openai')
            model: Model name (optional, uses provider default if not specified)
            **kwargs: Provider-specific configuration

        Raises:
            ValueError: If provider is not supported
        """
        provider_lower = provider.lower().strip()

        if provider_lower not in PROVIDER_REGISTRY:
            available = ", ".join(sorted(PROVIDER_REGISTRY.keys()))
            raise ValueError(
                f"Unsupported provider: {provider}. Available providers: {available}"
            )

        provider_class = PROVIDER_REGISTRY[provider_lower]
        logger.info(f"Creating {provider_class.__name__} with model={model}")

        if model is not None:
            kwargs["model"] = model

        return provider_class(**kwargs)

    @staticmethod
    def create_from_config(config: Dict[str, Any]) -> BaseLLMProvider:
        """Create provider from a configuration dictionary.

        The ``max_tokens`` entry is a request setting, not a client option, and
        is left out of the provider construction.

        Example:
            >>> provider = LLMProviderFactory.create_from_config(
            ...     {"provider": "openai", "model": "gpt-4-1106-preview"}
            ... )
        """
        if "provider" not in config:
            raise ValueError("Configuration must include 'provider' key")

        options = {k: v for k, v in config.items() if k != "max_tokens"}
        provider = options.pop("provider")
        return LLMProviderFactory.create_provider(provider, **options)
