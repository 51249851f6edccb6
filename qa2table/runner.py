"""Build pipelines from configuration and run them against an input source."""

from __future__ import annotations

import os
from typing import Any, Dict, Optional

from qa2table.agent.factory import LLMProviderFactory
from qa2table.qa.client import CompletionClient
from qa2table.qa.pipeline import QAPipeline, RunStats
from qa2table.qa.prompts import DEFAULT_MAX_TOKENS, DEFAULT_MODEL
from qa2table.sink.airtable import AirtableSink
from qa2table.sink.base import BaseSink
from qa2table.sink.log import LogSink
from qa2table.sources import InputSource
from qa2table.utils.config import Config, get_config
from qa2table.utils.logging import get_logger

logger = get_logger(__name__)

SYSTEM_PROMPT_ENV_VAR = "SYS_PROMPT"


def resolve_system_prompt(config: Optional[Config] = None) -> Optional[str]:
    """System prompt override from ``SYS_PROMPT`` or ``pipeline.system_prompt``."""
    config = config or get_config()
    return os.getenv(SYSTEM_PROMPT_ENV_VAR) or config.get("pipeline.system_prompt")


def create_sink(config: Optional[Config] = None, dry_run: bool = False) -> BaseSink:
    """Airtable sink, or a logging sink when ``dry_run`` is set."""
    if dry_run:
        return LogSink()
    return AirtableSink(config=config)


def build_pipeline(
    sink: BaseSink,
    config: Optional[Config] = None,
    client: Optional[CompletionClient] = None,
) -> QAPipeline:
    """Create a pipeline using the ``llm`` and ``pipeline`` config sections.

    Args:
        sink: Destination for the generated pairs
        config: Config to read; global config when None
        client: Completion client to use instead of one built from config
    """
    config = config or get_config()
    llm_config: Dict[str, Any] = dict(config.get("llm", {}) or {})
    llm_config.setdefault("provider", "openai")

    if client is None:
        client = CompletionClient(LLMProviderFactory.create_from_config(llm_config))

    return QAPipeline(
        client=client,
        sink=sink,
        system_prompt=resolve_system_prompt(config),
        model=llm_config.get("model") or DEFAULT_MODEL,
        max_tokens=int(llm_config.get("max_tokens") or DEFAULT_MAX_TOKENS),
    )


def run_once(
    source: InputSource,
    config: Optional[Config] = None,
    dry_run: bool = False,
    client: Optional[CompletionClient] = None,
) -> RunStats:
    """Load the input and process it with a fresh pipeline.

    The input is read before anything else is set up, so an unreadable source
    ends the run without a single request.

    Raises:
        InputError: If the source cannot be read
    """
    chunks = source.load()

    with create_sink(config, dry_run=dry_run) as sink:
        pipeline = build_pipeline(sink, config=config, client=client)
        logger.info(f"Starting run over {len(chunks)} sections with {pipeline!r}")
        stats = pipeline.run(chunks)

    logger.info(
        f"Run finished: {stats.pairs} Q&A pairs from {stats.chunks} sections "
        f"({stats.failed} without pairs due to errors)"
    )
    return stats
