"""Input sources: anything that yields the ordered strings to process."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List

from qa2table.exceptions import InputError
from qa2table.qa.chunker import split_text_into_chunks
from qa2table.utils.logging import get_logger

logger = get_logger(__name__)


class InputSource(ABC):
    """Produces the ordered list of chunks for a run."""

    @abstractmethod
    def load(self) -> List[str]:
        """Return the chunks to process.

        Raises:
            InputError: If the source cannot be read
        """


class TextFileSource(InputSource):
    """Plain text file split into blank-line separated sections."""

    def __init__(self, path: str | Path = "test.txt", flush_trailing: bool = False):
        self.path = Path(path)
        self.flush_trailing = flush_trailing

    def load(self) -> List[str]:
        try:
            raw_text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise InputError(f"Cannot read input file {self.path}: {e}") from e

        chunks = split_text_into_chunks(raw_text, flush_trailing=self.flush_trailing)
        logger.info(f"Loaded {len(chunks)} sections from {self.path}")
        return chunks

    def __repr__(self) -> str:
        return f"TextFileSource(path={self.path}, flush_trailing={self.flush_trailing})"


class JsonListSource(InputSource):
    """JSON file holding a list of pre-split sections."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> List[str]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError) as e:
            raise InputError(f"Cannot read input file {self.path}: {e}") from e
        except json.JSONDecodeError as e:
            raise InputError(f"Failed to parse JSON in {self.path}: {e}") from e

        if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
            raise InputError(f"{self.path} must contain a JSON list of strings")

        logger.info(f"Loaded {len(data)} sections from {self.path}")
        return data

    def __repr__(self) -> str:
        return f"JsonListSource(path={self.path})"


SOURCE_FORMATS = ("text", "json")


def create_source(
    fmt: str, path: str | Path, flush_trailing: bool = False
) -> InputSource:
    """Create an input source for ``fmt`` ("text" or "json").

    Raises:
        ValueError: If the format is not supported
    """
    fmt_lower = fmt.lower().strip()
    if fmt_lower == "text":
        return TextFileSource(path, flush_trailing=flush_trailing)
    if fmt_lower == "json":
        return JsonListSource(path)
    raise ValueError(
        f"Unsupported input format: {fmt}. Available formats: {', '.join(SOURCE_FORMATS)}"
    )
