"""Exceptions for chainview snapshot handling."""

from __future__ import annotations


class SnapshotError(Exception):
    """Snapshot file could not be read as a diagram.

    Raised when a snapshot is not valid JSON, lacks a ``nodes`` list, or
    contains a node or edge without its required keys.

    Attributes:
        path: Path of the offending snapshot, if it came from a file
        reason: What was wrong with it
        message: Human-readable error message
    """

    def __init__(
        self,
        reason: str,
        path: str | None = None,
        message: str | None = None,
    ) -> None:
        self.reason = reason
        self.path = path
        self.message = message or self._default_message()
        super().__init__(self.message)

    def _default_message(self) -> str:
        if self.path:
            return f"Invalid snapshot '{self.path}': {self.reason}"
        return f"Invalid snapshot: {self.reason}"
