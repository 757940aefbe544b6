"""Line classification for numbered and checkbox list items."""

from __future__ import annotations

from .constants import CHECKBOX_PATTERN, LEADING_WHITESPACE_PATTERN, NUMBERED_PATTERN
from .models import CheckboxMatch, ListItemMatch


def leading_whitespace(text: str) -> str:
    """Return the raw leading whitespace of a line.

    Tabs and spaces are kept as-is; no tab-width normalization is applied.

    Examples:
        leading_whitespace("\\t  1. item")  # "\\t  "
    """
    match = LEADING_WHITESPACE_PATTERN.match(text)
    return match.group(0) if match else ""


def is_nested_under(indent: str, parent_indent: str) -> bool:
    """Determine whether `indent` is strictly deeper than `parent_indent`.

    A line is nested when its leading whitespace extends the parent's leading
    whitespace character for character.

    Args:
        indent: Leading whitespace of the candidate line.
        parent_indent: Leading whitespace of the scope.

    Returns:
        bool: True for deeper indentation, False for equal, lesser or
            unrelated indentation.

    Examples:
        is_nested_under("\\t", "")  # True
        is_nested_under("  ", "  ")  # False
        is_nested_under("\\t", "  ")  # False
    """
    return len(indent) > len(parent_indent) and indent.startswith(parent_indent)


def match_numbered(text: str) -> ListItemMatch | None:
    """Classify a line as a numbered-list item.

    Args:
        text: Line text without a trailing newline.

    Returns:
        ListItemMatch | None: Indent, ordinal and matched prefix, or None when
            the line does not start with ``N. ``. Ordinals longer than nine
            digits are not list markers.

    Examples:
        match_numbered("  3. milk")  # ListItemMatch(indent="  ", ordinal=3, prefix="  3. ")
        match_numbered("- milk")  # None
    """
    match = NUMBERED_PATTERN.match(text)
    if match is None:
        return None
    return ListItemMatch(
        indent=match.group("indent"),
        ordinal=int(match.group("ordinal")),
        prefix=match.group(0),
    )


def match_checkbox(text: str) -> CheckboxMatch | None:
    """Classify a line as a checkbox item.

    Both bullet (``- [ ] ``) and numbered (``1. [x] ``) checkboxes are
    recognized. Only a lowercase ``x`` counts as checked.

    Args:
        text: Line text without a trailing newline.

    Returns:
        CheckboxMatch | None: Indent, checked state and marker kind, or None
            when the line is not a checkbox item.

    Examples:
        match_checkbox("- [x] done")  # CheckboxMatch(indent="", checked=True, numbered=False)
        match_checkbox("- [] nope")  # None
    """
    match = CHECKBOX_PATTERN.match(text)
    if match is None:
        return None
    return CheckboxMatch(
        indent=match.group("indent"),
        checked=match.group("state") == "x",
        numbered=match.group("marker")[0].isdigit(),
    )


def is_numbered(text: str) -> bool:
    return NUMBERED_PATTERN.match(text) is not None


def with_ordinal(text: str, match: ListItemMatch, ordinal: int) -> str:
    """Rewrite only the numeric prefix of a numbered line.

    The indent and everything from the ``.`` onwards are kept; leading zeros
    in the old number are dropped.

    Examples:
        with_ordinal("  1.  a", match_numbered("  1.  a"), 7)  # "  7.  a"
        with_ordinal("09. a", match_numbered("09. a"), 10)  # "10. a"
    """
    dot = match.prefix.index(".", len(match.indent))
    return f"{match.indent}{ordinal}{text[dot:]}"
