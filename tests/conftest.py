"""Shared fixtures."""

from __future__ import annotations

import logging

import pytest

from qa2table.utils.config import set_config

ENV_VARS = (
    "SYS_PROMPT",
    "QA2TABLE_CONFIG",
    "AIRTABLE_TOKEN",
    "AIRTABLE_TOKEN_GITHUB",
    "airtable_token_name",
    "airtable_base_id",
    "airtable_table_name",
)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Fresh global config, clean env and a propagating package logger."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    set_config(None)

    yield

    set_config(None)
    root = logging.getLogger("qa2table")
    for handler in list(root.handlers):
        handler.close()
    root.handlers.clear()
    root.setLevel(logging.NOTSET)
    root.propagate = True
