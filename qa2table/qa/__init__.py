"""QA pair generation: chunking, prompting, completion, extraction, driving."""

from __future__ import annotations

from qa2table.qa.chunker import split_text_into_chunks
from qa2table.qa.outcome import Outcome, RecoverableFailure, Success
from qa2table.qa.prompts import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL,
    DEFAULT_SYSTEM_PROMPT,
    CompletionRequest,
    build_request,
)
from qa2table.qa.extractor import QAPair, extract_pairs
from qa2table.qa.client import CompletionClient
from qa2table.qa.pipeline import ChunkResult, ChunkStatus, QAPipeline, RunStats

__all__ = [
    "ChunkResult",
    "ChunkStatus",
    "CompletionClient",
    "CompletionRequest",
    "DEFAULT_MAX_TOKENS",
    "DEFAULT_MODEL",
    "DEFAULT_SYSTEM_PROMPT",
    "Outcome",
    "QAPair",
    "QAPipeline",
    "RecoverableFailure",
    "RunStats",
    "Success",
    "build_request",
    "extract_pairs",
    "split_text_into_chunks",
]
