"""Result values for steps that may fail without stopping the pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    """The step produced a value."""

    data: T


@dataclass(frozen=True)
class RecoverableFailure:
    """The step produced nothing for this chunk; the run goes on."""

    reason: str


Outcome = Union[Success[T], RecoverableFailure]
