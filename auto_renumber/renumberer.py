"""Ordinal recomputation for numbered-list blocks."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .changes import ChangeAccumulator, LineOverlay
from .classifier import is_numbered, match_numbered, with_ordinal
from .constants import NOT_FOUND
from .locator import find_block_start, find_preceding_sibling
from .models import Change, PendingChanges
from .strategy import NumberingStrategy

logger = logging.getLogger(__name__)


class Renumberer:
    """Recompute ordinals of numbered lists after an edit.

    The strategy is fixed for the lifetime of the instance; build a new
    `Renumberer` to switch strategies.

    Attributes:
        strategy: Policy deciding where a list that continues no sibling
            starts.
    """

    def __init__(self, strategy: NumberingStrategy = NumberingStrategy.DYNAMIC):
        self.strategy = strategy

    def renumber_from_line(
        self, lines: Sequence[str], start: int, local_only: bool = True
    ) -> PendingChanges:
        """Renumber the list from `start` downwards.

        The expected ordinal of `start` continues its preceding sibling when
        there is one and otherwise comes from the strategy. In local mode the
        scan stops at the first already-correct line after `start`; this
        relies on an edit only desynchronising the lines from the edit point
        onwards. Without `local_only` the scan runs to the end of the block.

        Args:
            lines: Document lines.
            start: Zero-based index of the edited line.
            local_only: Stop as soon as the numbering is consistent again.

        Returns:
            PendingChanges: Replacements for lines whose ordinal was wrong.
                When `start` is not numbered, an empty set with
                ``end_index == start``.

        Examples:
            Renumberer(NumberingStrategy.START_FROM_ONE).renumber_from_line(
                ["1. a", "1. b", "1. c"], 0
            )  # changes lines 1 and 2 to "2. b" and "3. c"
        """
        match = match_numbered(lines[start]) if 0 <= start < len(lines) else None
        if match is None:
            return PendingChanges(end_index=start)

        expected = self.strategy.base_ordinal(self._sibling_ordinal(lines, start), match.ordinal)
        return self._generate_changes(lines, start, expected, local_only)

    def renumber_block(self, lines: Sequence[str], index: int) -> PendingChanges:
        """Renumber the whole numbered block that contains `index`."""
        start = find_block_start(lines, index)
        if start == NOT_FOUND:
            return PendingChanges(end_index=index)
        return self.renumber_from_line(lines, start, local_only=False)

    def renumber_range(self, lines: Sequence[str], start: int, end: int) -> PendingChanges:
        """Renumber every numbered block touching ``[start, end)``.

        Used after multi-line operations (paste, drop, checkbox moves) that
        may shift several independent blocks. Each block is renumbered once,
        in full, from its first line. Under `DYNAMIC` a block is seeded at its
        own first written ordinal, so a block that follows nested content
        keeps the number the user gave it; under `START_FROM_ONE` it continues
        a preceding sibling or starts at 1. Blocks seen later read the
        corrected text of earlier ones.

        Args:
            lines: Document lines.
            start: First index of the range.
            end: Exclusive end of the range.

        Returns:
            PendingChanges: Replacements for all touched blocks, with
                `end_index` set to the last line consumed.
        """
        overlay = LineOverlay(lines, ChangeAccumulator())
        end_index = start
        line = max(start, 0)
        end = min(end, len(lines))

        while line < end:
            if not is_numbered(overlay[line]):
                line += 1
                continue
            block_start = find_block_start(overlay, line)
            block = self._generate_changes(
                overlay, block_start, self._range_base(overlay, block_start), local_only=False
            )
            overlay.accumulator.extend(block.changes)
            end_index = max(end_index, block.end_index)
            line = block.end_index + 1

        changes = overlay.accumulator.changes
        if changes:
            logger.debug("Renumbered %d line(s) in range [%d, %d)", len(changes), start, end)
        return PendingChanges(changes=changes, end_index=end_index)

    def renumber_all(self, lines: Sequence[str]) -> PendingChanges:
        """Renumber every numbered list in the document."""
        return self.renumber_range(lines, 0, len(lines))

    def _range_base(self, lines: Sequence[str], start: int) -> int:
        written = match_numbered(lines[start]).ordinal
        if self.strategy is NumberingStrategy.DYNAMIC:
            return written
        return self.strategy.base_ordinal(self._sibling_ordinal(lines, start), written)

    def _sibling_ordinal(self, lines: Sequence[str], index: int) -> int | None:
        sibling = find_preceding_sibling(lines, index)
        if sibling == NOT_FOUND:
            return None
        match = match_numbered(lines[sibling])
        return None if match is None else match.ordinal

    def _generate_changes(
        self, lines: Sequence[str], line: int, expected: int, local_only: bool
    ) -> PendingChanges:
        indent = match_numbered(lines[line]).indent
        changes: list[Change] = []
        is_first_line = True

        while line < len(lines):
            text = lines[line]
            match = match_numbered(text)
            if match is None or match.indent != indent:
                break

            if match.ordinal != expected:
                changes.append(Change(line, with_ordinal(text, match, expected)))
            elif local_only and not is_first_line:
                break

            is_first_line = False
            line += 1
            expected += 1

        return PendingChanges(changes=changes, end_index=line - 1)
