"""Parse completion payloads into question/answer pairs."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List

from qa2table.qa.outcome import Outcome, RecoverableFailure, Success
from qa2table.utils.logging import get_logger

logger = get_logger(__name__)

QA_PAIRS_KEY = "qa_pairs"


@dataclass(frozen=True)
class QAPair:
    """One generated question with its answer."""

    question: str
    answer: str


class PayloadShapeError(ValueError):
    """Decoded JSON does not map keys to lists of question/answer objects."""


def _check_entry(key: str, index: int, entry: Any) -> Dict[str, str]:
    if not isinstance(entry, dict):
        raise PayloadShapeError(f"{key}[{index}] is not an object")
    for field in ("question", "answer"):
        if not isinstance(entry.get(field), str):
            raise PayloadShapeError(f"{key}[{index}].{field} is missing or not a string")
    return entry


def _decode(payload: str) -> Dict[str, List[Dict[str, str]]]:
    decoded = json.loads(payload)
    if not isinstance(decoded, dict):
        raise PayloadShapeError(f"expected a JSON object, got {type(decoded).__name__}")

    # Every key is held to the same shape, not just qa_pairs
    for key, entries in decoded.items():
        if not isinstance(entries, list):
            raise PayloadShapeError(f"value of {key!r} is not a list")
        for index, entry in enumerate(entries):
            _check_entry(key, index, entry)
    return decoded


def extract_pairs(payload: str) -> Outcome[List[QAPair]]:
    """Extract QA pairs from a raw completion payload.

    Args:
        payload: JSON text such as ``{"qa_pairs": [{"question": ..., "answer": ...}]}``

    Returns:
        ``Success`` with the pairs in list order (an empty list when the
        ``qa_pairs`` key is absent), or ``RecoverableFailure`` when the payload
        is not valid JSON of the expected shape or is nested too deeply
        to decode.
    """
    try:
        decoded = _decode(payload)
    except (json.JSONDecodeError, PayloadShapeError, RecursionError) as e:
        logger.error(f"Failed to deserialize qa_pairs_json: {e}")
        return RecoverableFailure(f"unparseable payload: {e}")

    pairs: List[QAPair] = []
    for index, entry in enumerate(decoded.get(QA_PAIRS_KEY, [])):
        question, answer = entry["question"], entry["answer"]
        if not question.strip() or not answer.strip():
            logger.warning(f"Dropping {QA_PAIRS_KEY}[{index}]: empty question or answer")
            continue
        pairs.append(QAPair(question=question, answer=answer))

    return Success(pairs)
