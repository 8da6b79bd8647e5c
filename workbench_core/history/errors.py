"""Typed recently-opened history errors."""

from __future__ import annotations


class HistoryError(RuntimeError):
    """Base history error."""


class HistoryPersistError(HistoryError):
    """The updated history could not be written; the previous one is kept."""
