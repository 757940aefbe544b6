"""Block and indentation-scope discovery around a line index."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from .classifier import is_nested_under, leading_whitespace, match_checkbox, match_numbered
from .constants import NOT_FOUND
from .models import ScopeBounds


def _is_nested(text: str, indent: str) -> bool:
    # Blank lines never count as nested content; they end runs instead.
    return bool(text.strip()) and is_nested_under(leading_whitespace(text), indent)


def find_block_start(lines: Sequence[str], index: int) -> int:
    """Find the first line of the numbered block containing `index`.

    Walks upward while lines are numbered items with exactly the same
    indentation.

    Args:
        lines: Document lines.
        index: Zero-based index to start from.

    Returns:
        int: Index of the block's first line, or ``NOT_FOUND`` when `index`
            is out of range or not a numbered item.

    Examples:
        find_block_start(["x", "1. a", "2. b"], 2)  # 1
    """
    if not 0 <= index < len(lines):
        return NOT_FOUND
    match = match_numbered(lines[index])
    if match is None:
        return NOT_FOUND

    start = index
    while start > 0:
        previous = match_numbered(lines[start - 1])
        if previous is None or previous.indent != match.indent:
            break
        start -= 1
    return start


def find_block_end(lines: Sequence[str], index: int) -> int:
    """Find the last line (inclusive) of the numbered block containing `index`.

    Returns ``NOT_FOUND`` when `index` is out of range or not numbered.
    """
    if not 0 <= index < len(lines):
        return NOT_FOUND
    match = match_numbered(lines[index])
    if match is None:
        return NOT_FOUND

    end = index
    while end + 1 < len(lines):
        following = match_numbered(lines[end + 1])
        if following is None or following.indent != match.indent:
            break
        end += 1
    return end


def find_preceding_sibling(lines: Sequence[str], index: int) -> int:
    """Find the nearest line above `index` at the same indentation.

    Deeper-indented lines are nested content of an earlier item and are
    skipped. A blank line or a line with lesser (or unrelated) indentation
    ends the search.

    Args:
        lines: Document lines.
        index: Zero-based index of the line whose sibling is wanted.

    Returns:
        int: Index of the sibling line, or ``NOT_FOUND``.

    Examples:
        find_preceding_sibling(["1. a", "\\t1. x", "2. b"], 2)  # 0
        find_preceding_sibling(["- a", "\\t1. x"], 1)  # NOT_FOUND
    """
    if not 0 <= index < len(lines):
        return NOT_FOUND
    indent = leading_whitespace(lines[index])

    i = index - 1
    while i >= 0:
        text = lines[i]
        if _is_nested(text, indent):
            i -= 1
            continue
        if text.strip() and leading_whitespace(text) == indent:
            return i
        break
    return NOT_FOUND


def find_scope_bounds(
    lines: Sequence[str], index: int, checkboxes_only: bool = True
) -> ScopeBounds | None:
    """Locate the indentation scope around a line.

    The scope is the maximal run of lines sharing the exact indentation of
    `index`. Deeper-indented lines belong to the item above them and are
    stepped over without ending the walk. A blank line, a line with lesser
    indentation or the document edge ends the scope. With `checkboxes_only`,
    a same-indentation line that is not a checkbox of the same marker kind
    (``- [ ]`` versus ``1. [ ]``) ends it as well.

    Args:
        lines: Document lines.
        index: Zero-based index inside the scope.
        checkboxes_only: Whether non-checkbox lines interrupt the scope.

    Returns:
        ScopeBounds | None: Half-open range of the scope, including nested
            lines that trail its last item. None when `index` is out of range,
            blank, or (with `checkboxes_only`) not a checkbox.

    Examples:
        find_scope_bounds(["- [ ] a", "\\t- [x] b", "- [ ] c", "text"], 0)
        # ScopeBounds(start=0, limit=3)
    """
    if not 0 <= index < len(lines) or not lines[index].strip():
        return None

    head = lines[index]
    indent = leading_whitespace(head)
    head_checkbox = match_checkbox(head)
    if checkboxes_only and head_checkbox is None:
        return None

    def is_member(text: str) -> bool:
        if not text.strip() or leading_whitespace(text) != indent:
            return False
        if not checkboxes_only:
            return True
        checkbox = match_checkbox(text)
        return checkbox is not None and checkbox.numbered == head_checkbox.numbered

    start = index
    i = index - 1
    while i >= 0:
        if _is_nested(lines[i], indent):
            i -= 1
        elif is_member(lines[i]):
            start = i
            i -= 1
        else:
            break

    limit = index + 1
    while limit < len(lines) and (
        _is_nested(lines[limit], indent) or is_member(lines[limit])
    ):
        limit += 1

    return ScopeBounds(start, limit)


def iter_scope_items(lines: Sequence[str], bounds: ScopeBounds) -> Iterator[int]:
    """Yield the indices of the items that sit directly at the scope's indentation."""
    indent = leading_whitespace(lines[bounds.start])
    for i in range(bounds.start, bounds.limit):
        if not _is_nested(lines[i], indent):
            yield i


def item_extent(lines: Sequence[str], index: int, limit: int) -> int:
    """Return the index just past the item at `index` and its nested lines.

    Args:
        lines: Document lines.
        index: Index of an item.
        limit: Exclusive upper bound for the walk.
    """
    indent = leading_whitespace(lines[index])
    end = index + 1
    while end < limit and _is_nested(lines[end], indent):
        end += 1
    return end
