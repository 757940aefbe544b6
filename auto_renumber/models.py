"""Data models for auto-renumber."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


@dataclass(frozen=True)
class ListItemMatch:
    """Numbered-list metadata extracted from one line.

    Attributes:
        indent: Raw leading whitespace of the line.
        ordinal: Integer written in the ``N. `` prefix.
        prefix: Matched prefix text, including indent and trailing space.
    """

    indent: str
    ordinal: int
    prefix: str

    @property
    def indent_width(self) -> int:
        return len(self.indent)


@dataclass(frozen=True)
class CheckboxMatch:
    """Checkbox metadata extracted from one line.

    Attributes:
        indent: Raw leading whitespace of the line.
        checked: True for ``[x]``, False for ``[ ]``.
        numbered: True when the checkbox follows an ``N. `` marker rather
            than a ``- `` bullet.
    """

    indent: str
    checked: bool
    numbered: bool

    @property
    def indent_width(self) -> int:
        return len(self.indent)


@dataclass(frozen=True)
class ScopeBounds:
    """Half-open range ``[start, limit)`` of line indices."""

    start: int
    limit: int

    def __len__(self) -> int:
        return max(self.limit - self.start, 0)


@dataclass(frozen=True)
class Change:
    """Full-line replacement.

    Attributes:
        line: Zero-based index of the line to replace.
        text: New text of the line, without a trailing newline.
    """

    line: int
    text: str


@dataclass
class PendingChanges:
    """Changes produced by one renumbering scan.

    Attributes:
        changes: Full-line replacements in scan order.
        end_index: Last line index that belonged to the scan.
    """

    changes: list[Change] = field(default_factory=list)
    end_index: int = 0

    def __bool__(self) -> bool:
        return bool(self.changes)


class ReorderState(Enum):
    """Stages of one checkbox reorder invocation.

    Attributes:
        IDLE: Nothing inspected yet.
        SCOPE_LOCATED: Indentation scope around the trigger line is known.
        BOUNDARY_COMPUTED: Destination index has been decided.
        NO_OP: Trigger line already sits on the correct side.
        RELOCATED: Trigger line was moved.
    """

    IDLE = auto()
    SCOPE_LOCATED = auto()
    BOUNDARY_COMPUTED = auto()
    NO_OP = auto()
    RELOCATED = auto()


@dataclass
class ReorderContext:
    """Encapsulate reorder state for a single trigger line.

    Attributes:
        trigger: Index of the checkbox line that changed.
        state: Current stage of the invocation.
        scope: Indentation scope containing the trigger, once located.
        destination: Final index of the trigger line, once computed.
    """

    trigger: int
    state: ReorderState = ReorderState.IDLE
    scope: ScopeBounds | None = None
    destination: int | None = None


@dataclass(frozen=True)
class Position:
    """Cursor position as reported by the host editor."""

    line: int
    ch: int = 0


@dataclass(frozen=True)
class Selection:
    """Anchor and head of the primary selection."""

    anchor: Position
    head: Position

    @property
    def top_line(self) -> int:
        return min(self.anchor.line, self.head.line)
