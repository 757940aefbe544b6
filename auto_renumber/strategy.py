"""Policies for choosing the first ordinal of a numbered block."""

from __future__ import annotations

from enum import Enum


class NumberingStrategy(Enum):
    """How a numbered block picks its base ordinal.

    Attributes:
        START_FROM_ONE: A list that does not continue a sibling always starts
            at 1, whatever number is written on its first line.
        DYNAMIC: A list that does not continue a sibling keeps the number the
            user wrote on its first line.

    Both strategies continue a preceding sibling item (same indentation,
    nested lines skipped) with ``sibling + 1``. For `START_FROM_ONE` this
    means "always 1" holds for a list's first block only: a block that
    resumes a list after a nested sublist carries on from the item above the
    sublist instead of restarting.
    """

    START_FROM_ONE = "start-from-one"
    DYNAMIC = "dynamic"

    def base_ordinal(self, sibling_ordinal: int | None, written_ordinal: int) -> int:
        """Return the ordinal the first scanned line should carry.

        Args:
            sibling_ordinal: Ordinal of the preceding sibling item, or None
                when the line starts a new list.
            written_ordinal: Ordinal currently written on the line.

        Examples:
            NumberingStrategy.DYNAMIC.base_ordinal(None, 5)  # 5
            NumberingStrategy.START_FROM_ONE.base_ordinal(None, 5)  # 1
            NumberingStrategy.START_FROM_ONE.base_ordinal(3, 5)  # 4
        """
        if sibling_ordinal is not None:
            return sibling_ordinal + 1
        if self is NumberingStrategy.START_FROM_ONE:
            return 1
        return written_ordinal

    @classmethod
    def parse(cls, value: str | NumberingStrategy) -> NumberingStrategy:
        """Resolve a strategy from its configuration spelling.

        Accepts ``"start-from-one"``, ``"dynamic"``, underscore variants and
        any casing.

        Raises:
            ValueError: If `value` names no strategy.
        """
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower().replace("_", "-")
        for strategy in cls:
            if strategy.value == normalized:
                return strategy
        choices = ", ".join(strategy.value for strategy in cls)
        raise ValueError(f"Unknown numbering strategy {value!r} (expected one of: {choices})")
