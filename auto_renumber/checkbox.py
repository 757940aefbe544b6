"""Checklist reordering: cluster completed items at one end of their scope."""

from __future__ import annotations

import logging
from collections.abc import MutableSequence, Sequence

from .classifier import match_checkbox
from .constants import NOT_FOUND
from .locator import find_scope_bounds, item_extent, iter_scope_items
from .models import ReorderContext, ReorderState, ScopeBounds

logger = logging.getLogger(__name__)


def find_checkbox_boundary(
    lines: Sequence[str], start: int, sort_to_bottom: bool, checkboxes_only: bool = True
) -> int:
    """Find where the leading cluster of a checkbox scope ends.

    Walks the scope items from `start` and returns the first one whose state
    does not belong at the top: a checked item when completed items sort to
    the bottom, an unchecked one when they sort to the top.

    Args:
        lines: Document lines.
        start: Index of a checkbox line where the walk begins.
        sort_to_bottom: Whether completed items cluster at the bottom.
        checkboxes_only: Whether non-checkbox lines interrupt the scope.

    Returns:
        int: Index of the first item of the trailing state, the scope limit
            when there is none, or ``NOT_FOUND`` when `start` is not a
            checkbox.

    Examples:
        find_checkbox_boundary(["- [ ] a", "- [ ] b", "c", "- [ ] d"], 0, True)  # 2
        find_checkbox_boundary(["1. [x] a", "2. [ ] b", "3. [x] c"], 0, False)  # 1
    """
    bounds = find_scope_bounds(lines, start, checkboxes_only)
    if bounds is None:
        return NOT_FOUND

    for index in iter_scope_items(lines, bounds):
        if index < start:
            continue
        checkbox = match_checkbox(lines[index])
        if checkbox is not None and checkbox.checked == sort_to_bottom:
            return index
    return bounds.limit


def move_line(lines: MutableSequence[str], source: int, destination: int) -> None:
    """Move one line to `destination`, shifting the lines in between.

    Only item assignment is used, so the line count of `lines` never changes.

    Examples:
        lines = ["a", "b", "c", "d"]
        move_line(lines, 0, 2)  # lines == ["b", "c", "a", "d"]
    """
    if source < destination:
        rotated = [lines[i] for i in range(source + 1, destination + 1)] + [lines[source]]
        first = source
    else:
        rotated = [lines[source]] + [lines[i] for i in range(destination, source)]
        first = destination

    for offset, text in enumerate(rotated):
        lines[first + offset] = text


class CheckboxReorderer:
    """Move a toggled checkbox to the correct side of its scope.

    Completed items cluster at the bottom (or top) of their indentation scope.
    Each call relocates at most one line, the trigger, and keeps the relative
    order of the other items. Nested lines of the scope are left in place.

    Attributes:
        sort_to_bottom: Whether completed items cluster at the bottom.
        checkboxes_only: Whether non-checkbox lines interrupt a scope.
        last_context: State of the most recent invocation.
    """

    def __init__(self, sort_to_bottom: bool = True, checkboxes_only: bool = True):
        self.sort_to_bottom = sort_to_bottom
        self.checkboxes_only = checkboxes_only
        self.last_context: ReorderContext | None = None

    def reorder(self, lines: MutableSequence[str], index: int) -> ScopeBounds | None:
        """Relocate the checkbox at `index` if its state puts it on the wrong side.

        Args:
            lines: Mutable document lines; the move is written through item
                assignment.
            index: Index of the checkbox line that changed.

        Returns:
            ScopeBounds | None: Range spanning the original and destination
                positions (inclusive, as a half-open range) for a follow-up
                renumbering pass, or None when nothing moved.

        Examples:
            lines = ["- [ ] a", "- [x] b", "\\t- [x] c", "- [ ] d"]
            CheckboxReorderer(sort_to_bottom=True).reorder(lines, 1)
            # ScopeBounds(start=1, limit=4); "- [x] b" is now last
        """
        context = ReorderContext(trigger=index)
        self.last_context = context

        trigger = match_checkbox(lines[index]) if 0 <= index < len(lines) else None
        bounds = find_scope_bounds(lines, index, self.checkboxes_only) if trigger else None
        if bounds is None:
            context.state = ReorderState.NO_OP
            return None
        context.scope = bounds
        context.state = ReorderState.SCOPE_LOCATED

        destination = self._destination(lines, index, trigger.checked, bounds)
        if destination is None:
            context.state = ReorderState.NO_OP
            return None
        context.destination = destination
        context.state = ReorderState.BOUNDARY_COMPUTED

        move_line(lines, index, destination)
        context.state = ReorderState.RELOCATED
        logger.debug("Moved checkbox from line %d to line %d", index, destination)
        return ScopeBounds(min(index, destination), max(index, destination) + 1)

    def _destination(
        self, lines: Sequence[str], index: int, checked: bool, bounds: ScopeBounds
    ) -> int | None:
        leading_state = not self.sort_to_bottom
        siblings: list[tuple[int, bool]] = []
        for item in iter_scope_items(lines, bounds):
            checkbox = match_checkbox(lines[item])
            if item != index and checkbox is not None:
                siblings.append((item, checkbox.checked))

        if checked == leading_state:
            # Belongs in the top cluster: jump above the first trailing item above it.
            above = [item for item, state in siblings if item < index and state != leading_state]
            return above[0] if above else None

        # Belongs in the bottom cluster: land after the last leading item below it.
        below = [item for item, state in siblings if item > index and state == leading_state]
        if not below:
            return None
        return item_extent(lines, below[-1], bounds.limit) - 1
