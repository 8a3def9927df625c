"""Exceptions raised while loading the static datasets."""

from __future__ import annotations


class DatasetLoadError(RuntimeError):
    """A dataset source could not be read (transport error, bad status, bad JSON).

    Load failures are terminal for a session: nothing retries, and a fresh
    session starts the load from scratch.
    """

    def __init__(self, source: str, reason: str):
        super().__init__(f"Failed to load dataset from {source!r}: {reason}")
        self.source = source
        self.reason = reason


class DatasetFormatError(DatasetLoadError):
    """The decoded payload does not have the expected top-level shape."""
