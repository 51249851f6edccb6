"""Destinations for generated QA pairs."""

from __future__ import annotations

from qa2table.sink.airtable import (
    AirtableSettings,
    AirtableSink,
    resolve_settings,
    resolve_token,
)
from qa2table.sink.base import BaseSink, UploadRecord, to_record
from qa2table.sink.log import LogSink

__all__ = [
    "AirtableSettings",
    "AirtableSink",
    "BaseSink",
    "LogSink",
    "UploadRecord",
    "resolve_settings",
    "resolve_token",
    "to_record",
]
