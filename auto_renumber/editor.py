"""Host editor interface and an in-memory implementation."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Protocol

from .exceptions import EditRejectedError
from .models import Change, Position, Selection


class Editor(Protocol):
    """Operations the engine needs from the host document.

    The host owns the lines. The engine only reads them and writes through
    `apply_atomic_edit`, which must apply all changes or none.
    """

    def get_line(self, index: int) -> str: ...

    def line_count(self) -> int: ...

    def apply_atomic_edit(self, changes: Sequence[Change]) -> None: ...

    def get_selection(self) -> Selection: ...

    def set_cursor(self, position: Position) -> None: ...


class LineDocument:
    """List-of-lines document that satisfies the `Editor` protocol.

    Used by the command-line interface and handy for embedding the engine
    where no real editor exists.

    Attributes:
        trailing_newline: Whether `to_text` ends with a newline.
        edit_count: Number of atomic edits applied so far.

    Examples:
        doc = LineDocument.from_text("1. a\\n1. b\\n")
        doc.get_line(1)  # "1. b"
    """

    def __init__(
        self,
        lines: Iterable[str] = ("",),
        selection: Selection | None = None,
        trailing_newline: bool = False,
    ):
        self._lines = list(lines) or [""]
        self._selection = selection or Selection(Position(0), Position(0))
        self.trailing_newline = trailing_newline
        self.edit_count = 0

    @classmethod
    def from_text(cls, text: str) -> LineDocument:
        lines = text.split("\n")
        trailing_newline = len(lines) > 1 and lines[-1] == ""
        if trailing_newline:
            lines.pop()
        return cls(lines, trailing_newline=trailing_newline)

    def to_text(self) -> str:
        text = "\n".join(self._lines)
        return f"{text}\n" if self.trailing_newline else text

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def line_count(self) -> int:
        return len(self._lines)

    def apply_atomic_edit(self, changes: Sequence[Change]) -> None:
        """Replace whole lines, validating every change before writing any.

        Raises:
            EditRejectedError: If a change targets a line outside the document.
        """
        for change in changes:
            if not 0 <= change.line < len(self._lines):
                raise EditRejectedError(change.line, "line does not exist")
            if "\n" in change.text:
                raise EditRejectedError(change.line, "replacement spans several lines")

        for change in changes:
            self._lines[change.line] = change.text
        self.edit_count += 1

    def get_selection(self) -> Selection:
        return self._selection

    def set_cursor(self, position: Position) -> None:
        self._selection = Selection(position, position)

    def select(self, anchor: Position, head: Position) -> None:
        self._selection = Selection(anchor, head)

    # Host-side edits, standing in for the user typing or pasting.

    def set_line(self, index: int, text: str) -> None:
        self._lines[index] = text
        self.set_cursor(Position(index, len(text)))

    def insert_lines(self, index: int, new_lines: Iterable[str]) -> int:
        """Insert lines before `index` and return how many were inserted."""
        inserted = list(new_lines)
        self._lines[index:index] = inserted
        if inserted:
            self.set_cursor(Position(index + len(inserted) - 1, len(inserted[-1])))
        return len(inserted)
