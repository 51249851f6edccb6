"""Tests for the pipeline driver."""

from __future__ import annotations

import json
import logging
from unittest.mock import MagicMock

import pytest

from qa2table.agent.providers.openai import OpenAIProvider
from qa2table.exceptions import RequestBuildError
from qa2table.qa.client import CompletionClient
from qa2table.qa.extractor import QAPair
from qa2table.qa.outcome import RecoverableFailure, Success
from qa2table.qa.pipeline import ChunkResult, ChunkStatus, QAPipeline, RunStats
from qa2table.sink.log import LogSink


def _payload(*questions):
    return json.dumps(
        {"qa_pairs": [{"question": q, "answer": f"answer to {q}"} for q in questions]}
    )


class ScriptedClient:
    """Completion client returning a canned outcome per chunk text."""

    def __init__(self, outcomes):
        self.outcomes = outcomes
        self.requests = []

    def complete(self, request):
        self.requests.append(request)
        chunk = request.user_prompt.split("---\n")[1].strip()
        return self.outcomes[chunk]


@pytest.fixture
def sink():
    return LogSink()


def test_failed_chunk_does_not_stop_the_run(sink):
    client = ScriptedClient(
        {
            "chunk one": Success(_payload("Q1", "Q2")),
            "chunk two": RecoverableFailure("service down"),
            "chunk three": Success(_payload("Q3")),
        }
    )
    pipeline = QAPipeline(client, sink)

    stats = pipeline.run(["chunk one\n", "chunk two\n", "chunk three\n"])

    assert len(client.requests) == 3
    assert stats == RunStats(total=3, pairs=3, chunks=3, failed=1)
    assert [r["Question"] for r in sink.records] == ["Q1", "Q2", "Q3"]


def test_parse_failure_counts_as_zero_pairs(sink):
    client = ScriptedClient(
        {"good": Success(_payload("Q1")), "bad": Success("not json")}
    )

    stats = QAPipeline(client, sink).run(["bad\n", "good\n"])

    assert stats.pairs == 1
    assert stats.chunks == 2
    assert stats.failed == 1


def test_progress_logged_after_every_chunk(sink, caplog):
    caplog.set_level(logging.INFO, logger="qa2table")
    client = ScriptedClient(
        {"a": RecoverableFailure("down"), "b": Success(_payload("Q"))}
    )

    QAPipeline(client, sink).run(["a\n", "b\n"])

    assert "Processed 0 Q&A pairs in 1 of 2 sections." in caplog.text
    assert "Processed 1 Q&A pairs in 2 of 2 sections." in caplog.text
    assert "No Q&A pairs generated for the current chunk" in caplog.text


def test_upload_failures_do_not_change_counter():
    failing_sink = MagicMock()
    failing_sink.upload.side_effect = RuntimeError("table unavailable")
    client = ScriptedClient({"x": Success(_payload("Q1", "Q2"))})

    stats = QAPipeline(client, failing_sink).run(["x\n"])

    assert failing_sink.upload.call_count == 2
    assert stats.pairs == 2
    assert stats.failed == 0


def test_one_upload_failure_does_not_block_siblings():
    uploaded = []

    def upload(pair):
        if pair.question == "Q1":
            raise RuntimeError("rejected")
        uploaded.append(pair)

    flaky_sink = MagicMock()
    flaky_sink.upload.side_effect = upload
    client = ScriptedClient({"x": Success(_payload("Q1", "Q2", "Q3"))})

    QAPipeline(client, flaky_sink).run(["x\n"])

    assert [p.question for p in uploaded] == ["Q2", "Q3"]


def test_build_failure_logged_and_skipped(sink, caplog):
    client = ScriptedClient({"ok": Success(_payload("Q"))})

    stats = QAPipeline(client, sink).run(["   \n", "ok\n"])

    assert stats == RunStats(total=2, pairs=1, chunks=2, failed=1)
    assert len(client.requests) == 1
    assert "Failed to generate Q&A pairs" in caplog.text


def test_unexpected_client_error_does_not_abort(sink, caplog):
    client = MagicMock()
    client.complete.side_effect = [ValueError("bug"), Success(_payload("Q"))]

    stats = QAPipeline(client, sink).run(["a\n", "b\n"])

    assert stats.chunks == 2
    assert stats.pairs == 1


def test_process_chunk_raises_build_error(sink):
    pipeline = QAPipeline(ScriptedClient({}), sink)

    with pytest.raises(RequestBuildError):
        pipeline.process_chunk("")


def test_process_chunk_result(sink):
    client = ScriptedClient({"text": Success(_payload("Q"))})

    result = QAPipeline(client, sink).process_chunk("text\n")

    assert result == ChunkResult(
        ChunkStatus.PARSED, pairs=[QAPair("Q", "answer to Q")]
    )


def test_pipeline_passes_request_settings(sink):
    client = ScriptedClient({"text": Success(_payload())})
    pipeline = QAPipeline(
        client, sink, system_prompt="custom", model="gpt-3.5-turbo-1106", max_tokens=123
    )

    pipeline.run(["text\n"])

    request = client.requests[0]
    assert request.system_prompt == "custom"
    assert request.model == "gpt-3.5-turbo-1106"
    assert request.max_tokens == 123


def test_empty_run(sink):
    assert QAPipeline(ScriptedClient({}), sink).run([]) == RunStats(total=0)


def test_run_stats_advance_is_pure():
    stats = RunStats(total=2)
    advanced = stats.advance(ChunkResult(ChunkStatus.PARSE_FAILED))

    assert stats == RunStats(total=2)
    assert advanced == RunStats(total=2, pairs=0, chunks=1, failed=1)


def test_pipeline_model_reaches_openai_client(sink):
    provider = OpenAIProvider(api_key="test-key")
    provider.client = MagicMock()
    message = MagicMock(content=_payload("What is Rust?"))
    provider.client.chat.completions.create.return_value = MagicMock(
        choices=[MagicMock(message=message, finish_reason="stop")], usage=None
    )
    pipeline = QAPipeline(CompletionClient(provider), sink, model="gpt-3.5-turbo-1106")

    stats = pipeline.run(["Rust is a language.\n"])

    kwargs = provider.client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "gpt-3.5-turbo-1106"
    assert stats.pairs == 1
