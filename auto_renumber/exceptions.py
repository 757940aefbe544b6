"""Package-specific exception types."""

from __future__ import annotations


class RenumberError(Exception):
    """Base class for errors raised around the renumbering engine.

    The engine itself reports "not applicable" through ``None`` and sentinel
    indices; exceptions are reserved for the host boundary.
    """


class EditRejectedError(RenumberError):
    """Raised by a host when an atomic edit could not be applied.

    Args:
        line: Zero-based index of the offending change.
        reason: Human-readable explanation from the host.
    """

    def __init__(self, line: int, reason: str):
        self.line = line
        self.reason = reason
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        return f"Edit rejected at line {self.line + 1}: {self.reason}"
