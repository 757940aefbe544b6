"""Pending change collection and atomic application."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from .models import Change

if TYPE_CHECKING:
    from .editor import Editor

logger = logging.getLogger(__name__)


class ChangeAccumulator:
    """Ordered set of full-line replacements awaiting one atomic edit.

    Each line holds at most one pending change: recording a line again
    replaces its text but keeps the position of its first record.
    """

    def __init__(self, changes: Iterable[Change] = ()):
        self._changes: dict[int, Change] = {}
        self.extend(changes)

    def record(self, change: Change) -> None:
        self._changes[change.line] = change

    def extend(self, changes: Iterable[Change]) -> None:
        for change in changes:
            self.record(change)

    def text_for(self, line: int) -> str | None:
        change = self._changes.get(line)
        return None if change is None else change.text

    @property
    def changes(self) -> list[Change]:
        return list(self._changes.values())

    def clear(self) -> None:
        self._changes.clear()

    def __len__(self) -> int:
        return len(self._changes)

    def apply(self, editor: Editor) -> bool:
        """Submit every pending change to the host as one atomic edit.

        The pending set is cleared on every exit path, including when the
        host raises, so a rejected batch is never replayed on the next cycle.

        Args:
            editor: Host that receives the edit.

        Returns:
            bool: True when an edit was submitted, False when nothing was
                pending.

        Raises:
            EditRejectedError: Propagated from the host.
        """
        changes = self.changes
        try:
            if not changes:
                return False
            logger.debug("Applying %d line change(s) as one edit", len(changes))
            editor.apply_atomic_edit(changes)
            return True
        finally:
            self.clear()


class EditorLines(Sequence[str]):
    """Read-only sequence view over a host editor's lines."""

    def __init__(self, editor: Editor):
        self._editor = editor

    def __len__(self) -> int:
        return self._editor.line_count()

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(len(self)))]
        if index < 0:
            index += len(self)
        if not 0 <= index < len(self):
            raise IndexError("line index out of range")
        return self._editor.get_line(index)


class LineOverlay(Sequence[str]):
    """Line sequence that layers pending changes over a base sequence.

    Reads return the pending text for a line when one exists. Item
    assignment records a `Change` in the accumulator instead of touching the
    base, which lets several engine steps see each other's edits before the
    batch is applied. The line count is fixed.

    Examples:
        overlay = LineOverlay(["1. a", "1. b"], ChangeAccumulator())
        overlay[1] = "2. b"
        overlay[1]  # "2. b"
    """

    def __init__(self, base: Sequence[str], accumulator: ChangeAccumulator):
        self._base = base
        self.accumulator = accumulator

    def __len__(self) -> int:
        return len(self._base)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return [self[i] for i in range(*index.indices(len(self)))]
        if index < 0:
            index += len(self)
        if not 0 <= index < len(self):
            raise IndexError("line index out of range")
        pending = self.accumulator.text_for(index)
        return self._base[index] if pending is None else pending

    def __setitem__(self, index: int, text: str) -> None:
        if index < 0:
            index += len(self)
        if not 0 <= index < len(self):
            raise IndexError("line index out of range")
        self.accumulator.record(Change(index, text))


def pending_lines(editor: Editor, accumulator: ChangeAccumulator) -> LineOverlay:
    """Build the view the engine reads and writes during one reaction."""
    return LineOverlay(EditorLines(editor), accumulator)
