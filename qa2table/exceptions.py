"""Exceptions raised by qa2table."""

from __future__ import annotations


class Qa2TableError(Exception):
    """Base class for qa2table errors."""


class InputError(Qa2TableError):
    """The source text could not be read; nothing is processed for the run."""


class RequestBuildError(Qa2TableError):
    """A completion request could not be assembled for a chunk."""
