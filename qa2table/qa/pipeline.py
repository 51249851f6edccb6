"""Pipeline driver: chunk -> request -> completion -> pairs -> sink.

Chunks are processed one at a time and in order. Nothing that goes wrong for a
single chunk stops the run; the driver logs it and moves on.
"""

from __future__ import annotations

from contextlib import suppress
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, List, Optional, Sequence

from qa2table.exceptions import RequestBuildError
from qa2table.qa.client import CompletionClient
from qa2table.qa.extractor import QAPair, extract_pairs
from qa2table.qa.outcome import RecoverableFailure
from qa2table.qa.prompts import DEFAULT_MAX_TOKENS, DEFAULT_MODEL, build_request
from qa2table.sink.base import BaseSink
from qa2table.utils.logging import get_logger

logger = get_logger(__name__)


class ChunkStatus(str, Enum):
    """Terminal state of a chunk."""

    PARSED = "parsed"
    REQUEST_FAILED = "request_failed"
    PARSE_FAILED = "parse_failed"
    BUILD_FAILED = "build_failed"


@dataclass(frozen=True)
class ChunkResult:
    """What happened to one chunk."""

    status: ChunkStatus
    pairs: List[QAPair] = field(default_factory=list)
    reason: Optional[str] = None


@dataclass(frozen=True)
class RunStats:
    """Counters for a run.

    ``pairs`` counts extracted pairs, whether or not their upload succeeded.
    """

    total: int
    pairs: int = 0
    chunks: int = 0
    failed: int = 0

    def advance(self, result: ChunkResult) -> RunStats:
        """Return the counters after ``result`` has been processed."""
        return replace(
            self,
            pairs=self.pairs + len(result.pairs),
            chunks=self.chunks + 1,
            failed=self.failed + int(result.status is not ChunkStatus.PARSED),
        )


class QAPipeline:
    """Generate QA pairs for each chunk and hand them to a sink."""

    def __init__(
        self,
        client: CompletionClient,
        sink: BaseSink,
        system_prompt: Optional[str] = None,
        model: str = DEFAULT_MODEL,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ):
        """Initialize the pipeline.

        Args:
            client: Completion client used for every chunk
            sink: Destination receiving one record per pair
            system_prompt: System instruction override (default prompt when None)
            model: Model identifier sent with each request
            max_tokens: Output token budget per request
        """
        self.client = client
        self.sink = sink
        self.system_prompt = system_prompt
        self.model = model
        self.max_tokens = max_tokens

    def process_chunk(self, chunk: str) -> ChunkResult:
        """Run one chunk through request, completion, extraction and upload.

        Raises:
            RequestBuildError: If no request can be built for the chunk
        """
        request = build_request(
            chunk,
            system_prompt=self.system_prompt,
            model=self.model,
            max_tokens=self.max_tokens,
        )

        completion = self.client.complete(request)
        if isinstance(completion, RecoverableFailure):
            return ChunkResult(ChunkStatus.REQUEST_FAILED, reason=completion.reason)

        extracted = extract_pairs(completion.data)
        if isinstance(extracted, RecoverableFailure):
            return ChunkResult(ChunkStatus.PARSE_FAILED, reason=extracted.reason)

        for pair in extracted.data:
            # Best-effort delivery: a failed upload must not hold back its siblings
            with suppress(Exception):
                self.sink.upload(pair)

        return ChunkResult(ChunkStatus.PARSED, pairs=extracted.data)

    def _attempt(self, chunk: str) -> ChunkResult:
        try:
            return self.process_chunk(chunk)
        except RequestBuildError as e:
            logger.error(f"Failed to generate Q&A pairs: {e}")
            return ChunkResult(ChunkStatus.BUILD_FAILED, reason=str(e))
        except Exception as e:
            logger.exception(f"Failed to generate Q&A pairs: {e}")
            return ChunkResult(ChunkStatus.REQUEST_FAILED, reason=str(e))

    def run(self, chunks: Iterable[str]) -> RunStats:
        """Process every chunk in order and return the final counters.

        A progress line is logged after each chunk, whatever its outcome.
        """
        chunk_list: Sequence[str] = list(chunks)
        stats = RunStats(total=len(chunk_list))

        for chunk in chunk_list:
            result = self._attempt(chunk)
            if result.status is ChunkStatus.PARSED and not result.pairs:
                logger.warning("No Q&A pairs generated for the current chunk.")
            elif result.status in (ChunkStatus.REQUEST_FAILED, ChunkStatus.PARSE_FAILED):
                logger.warning(
                    f"No Q&A pairs generated for the current chunk ({result.reason})."
                )

            stats = stats.advance(result)
            logger.info(
                f"Processed {stats.pairs} Q&A pairs in {stats.chunks} of {stats.total} sections."
            )

        return stats

    def __repr__(self) -> str:
        return f"QAPipeline(client={self.client!r}, sink={self.sink!r}, model={self.model})"
