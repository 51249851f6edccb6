"""Tests for the completion client."""

from __future__ import annotations

from unittest.mock import MagicMock

from qa2table.agent.base import LLMResponse
from qa2table.qa.client import CompletionClient
from qa2table.qa.outcome import RecoverableFailure, Success
from qa2table.qa.prompts import build_request


def _provider(content=None, error=None):
    provider = MagicMock()
    if error is not None:
        provider.chat.side_effect = error
    else:
        provider.chat.return_value = LLMResponse(content=content, model="test-model")
    return provider


def test_success_returns_content():
    provider = _provider(content='{"qa_pairs": []}')
    client = CompletionClient(provider)

    outcome = client.complete(build_request("text"))

    assert outcome == Success('{"qa_pairs": []}')


def test_request_parameters_forwarded():
    provider = _provider(content="{}")
    request = build_request("text", system_prompt="sys")

    CompletionClient(provider).complete(request)

    provider.chat.assert_called_once_with(
        request.messages(),
        max_tokens=4000,
        response_format="json",
        model="gpt-4-1106-preview",
        n=1,
    )


def test_service_error_is_recoverable(caplog):
    provider = _provider(error=ConnectionError("boom"))

    outcome = CompletionClient(provider).complete(build_request("text"))

    assert isinstance(outcome, RecoverableFailure)
    assert "boom" in outcome.reason
    assert "Failed to create chat" in caplog.text


def test_missing_content_is_recoverable():
    for content in (None, ""):
        outcome = CompletionClient(_provider(content=content)).complete(
            build_request("text")
        )
        assert isinstance(outcome, RecoverableFailure)
        assert "no content" in outcome.reason
