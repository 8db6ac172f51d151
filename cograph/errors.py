"""Exception types raised by the co-purchase pipeline."""

from __future__ import annotations


class CographError(Exception):
    """Base class for pipeline failures."""


class IngestionError(CographError, ValueError):
    """The transaction source is unreadable or contains a malformed row."""


class GraphConsistencyError(CographError, RuntimeError):
    """A component or query refers to state the graph does not hold."""
