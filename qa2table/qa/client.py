"""Completion client: one chat-completion call per chunk."""

from __future__ import annotations

from qa2table.agent.base import BaseLLMProvider
from qa2table.qa.outcome import Outcome, RecoverableFailure, Success
from qa2table.qa.prompts import CompletionRequest
from qa2table.utils.logging import get_logger

logger = get_logger(__name__)


class CompletionClient:
    """Send completion requests and report failures as values.

    A transport or service error, or a response without content, becomes a
    ``RecoverableFailure`` so the caller can move on to the next chunk.
    """

    def __init__(self, provider: BaseLLMProvider):
        self.provider = provider

    def complete(self, request: CompletionRequest) -> Outcome[str]:
        """Return the first choice's raw content for ``request``."""
        try:
            response = self.provider.chat(
                request.messages(),
                max_tokens=request.max_tokens,
                response_format=request.response_format,
                model=request.model,
                n=request.n,
            )
        except Exception as e:
            logger.error(f"Failed to create chat: {e!r}")
            return RecoverableFailure(f"completion request failed: {e}")

        if not response.content:
            return RecoverableFailure("completion returned no content")
        return Success(response.content)

    def __repr__(self) -> str:
        return f"CompletionClient(provider={self.provider!r})"
