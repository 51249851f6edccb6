"""Dry-run sink that logs records instead of storing them."""

from __future__ import annotations

from typing import List

from qa2table.qa.extractor import QAPair
from qa2table.sink.base import BaseSink, UploadRecord, to_record


class LogSink(BaseSink):
    """Log each record at INFO level and keep it in memory."""

    def __init__(self) -> None:
        super().__init__()
        self.records: List[UploadRecord] = []

    def upload(self, pair: QAPair) -> None:
        record = to_record(pair)
        self.records.append(record)
        self.logger.info(f"Record: {record}")
