"""Base class for destinations that store generated QA pairs."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict

from qa2table.qa.extractor import QAPair
from qa2table.utils.logging import get_logger

logger = get_logger(__name__)

UploadRecord = Dict[str, str]


def to_record(pair: QAPair) -> UploadRecord:
    """Map a pair onto the destination table's column names."""
    return {"Question": pair.question, "Answer": pair.answer}


class BaseSink(ABC):
    """Write-only destination for QA pairs.

    ``upload`` must not raise: a pair that cannot be stored is lost, and its
    siblings are still submitted.
    """

    def __init__(self) -> None:
        self.logger = get_logger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    def upload(self, pair: QAPair) -> Any:
        """Submit one pair as a new record.

        Implementations may return a handle for the submission; callers in
        the pipeline never look at it.
        """

    def close(self) -> None:
        """Release resources; pending uploads are given the chance to finish."""

    def __enter__(self) -> BaseSink:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
