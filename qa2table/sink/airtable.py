"""Airtable sink: one record per QA pair, best-effort delivery."""

from __future__ import annotations

import os
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import quote

import httpx

from qa2table.qa.extractor import QAPair
from qa2table.sink.base import BaseSink, UploadRecord, to_record
from qa2table.utils.config import Config, get_config
from qa2table.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TOKEN_NAME = "github"
DEFAULT_BASE_ID = "appmhvMGsMRPmuUWJ"
DEFAULT_TABLE_NAME = "mention"
DEFAULT_API_URL = "https://api.airtable.com/v0"


@dataclass(frozen=True)
class AirtableSettings:
    """Where records go and which stored token authorizes the write."""

    token_name: str = DEFAULT_TOKEN_NAME
    base_id: str = DEFAULT_BASE_ID
    table_name: str = DEFAULT_TABLE_NAME
    api_url: str = DEFAULT_API_URL

    @property
    def endpoint(self) -> str:
        return f"{self.api_url.rstrip('/')}/{self.base_id}/{quote(self.table_name, safe='')}"


def resolve_settings(config: Optional[Config] = None) -> AirtableSettings:
    """Resolve destination settings: environment, then config, then defaults.

    The environment variable names are ``airtable_token_name``,
    ``airtable_base_id`` and ``airtable_table_name``.
    """
    config = config or get_config()

    def pick(env_name: str, key: str, default: str) -> str:
        return os.getenv(env_name) or config.get(f"airtable.{key}") or default

    return AirtableSettings(
        token_name=pick("airtable_token_name", "token_name", DEFAULT_TOKEN_NAME),
        base_id=pick("airtable_base_id", "base_id", DEFAULT_BASE_ID),
        table_name=pick("airtable_table_name", "table_name", DEFAULT_TABLE_NAME),
        api_url=config.get("airtable.api_url") or DEFAULT_API_URL,
    )


def resolve_token(token_name: str, config: Optional[Config] = None) -> Optional[str]:
    """Look up the API token registered under ``token_name``.

    Checked in order: ``AIRTABLE_TOKEN_<NAME>``, ``AIRTABLE_TOKEN``, then the
    ``airtable.tokens.<name>`` config entry.
    """
    config = config or get_config()
    env_key = "AIRTABLE_TOKEN_" + token_name.upper().replace("-", "_")
    return (
        os.getenv(env_key)
        or os.getenv("AIRTABLE_TOKEN")
        or config.get(f"airtable.tokens.{token_name}")
    )


class AirtableSink(BaseSink):
    """Create Airtable records without waiting for the outcome.

    Uploads run on a single background worker, so records for a chunk are
    sent in the order they were extracted. The returned futures are never
    inspected: a failed write is neither logged, retried nor counted, which
    makes delivery at-most-once.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        http_client: Optional[httpx.Client] = None,
        timeout: Optional[float] = None,
    ):
        super().__init__()
        self.config = config
        if timeout is None:
            timeout = (config or get_config()).get("airtable.timeout", 10.0)
        self._client = http_client or httpx.Client(timeout=timeout)
        self._executor = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="airtable-upload"
        )

        settings = resolve_settings(config)
        if resolve_token(settings.token_name, config) is None:
            logger.warning(
                f"No Airtable token found for '{settings.token_name}'; uploads will be rejected"
            )

    def _create_record(self, record: UploadRecord) -> httpx.Response:
        # Settings are read on every call so env changes apply to the next record
        settings = resolve_settings(self.config)
        token = resolve_token(settings.token_name, self.config) or ""
        response = self._client.post(
            settings.endpoint,
            json={"fields": record},
            headers={"Authorization": f"Bearer {token}"},
        )
        response.raise_for_status()
        return response

    def upload(self, pair: QAPair) -> Future:
        """Queue the record for ``pair`` and return immediately."""
        return self._executor.submit(self._create_record, to_record(pair))

    def close(self) -> None:
        self._executor.shutdown(wait=True)
        self._client.close()

    def __repr__(self) -> str:
        settings = resolve_settings(self.config)
        return f"AirtableSink(base_id={settings.base_id}, table={settings.table_name})"
