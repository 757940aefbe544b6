import pytest

from auto_renumber.classifier import (
    is_nested_under,
    is_numbered,
    leading_whitespace,
    match_checkbox,
    match_numbered,
    with_ordinal,
)
from auto_renumber.models import CheckboxMatch, ListItemMatch


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1. a", ListItemMatch(indent="", ordinal=1, prefix="1. ")),
        ("  12. milk", ListItemMatch(indent="  ", ordinal=12, prefix="  12. ")),
        ("\t3.\titem", ListItemMatch(indent="\t", ordinal=3, prefix="\t3.\t")),
        ("1. [x] done", ListItemMatch(indent="", ordinal=1, prefix="1. ")),
    ],
)
def test_match_numbered_extracts_indent_and_ordinal(text, expected):
    assert match_numbered(text) == expected


@pytest.mark.parametrize("text", ["", "text", "- a", "1.a", "1) a", "a 1. b", "1."])
def test_match_numbered_rejects_other_lines(text):
    assert match_numbered(text) is None
    assert is_numbered(text) is False


def test_overlong_ordinals_are_plain_text():
    assert match_numbered("9" * 5000 + ". item") is None
    assert match_numbered("1234567890. item") is None
    assert match_numbered("999999999. item").ordinal == 999_999_999
    assert match_checkbox("9" * 5000 + ". [x] item") is None


def test_indent_width_counts_raw_characters():
    assert match_numbered("\t  1. a").indent_width == 3
    assert match_checkbox("\t- [ ] a").indent_width == 1


@pytest.mark.parametrize(
    "text, expected",
    [
        ("- [ ] a", CheckboxMatch(indent="", checked=False, numbered=False)),
        ("- [x] a", CheckboxMatch(indent="", checked=True, numbered=False)),
        ("\t- [x] a", CheckboxMatch(indent="\t", checked=True, numbered=False)),
        ("1. [ ] a", CheckboxMatch(indent="", checked=False, numbered=True)),
        ("  10. [x] a", CheckboxMatch(indent="  ", checked=True, numbered=True)),
    ],
)
def test_match_checkbox(text, expected):
    assert match_checkbox(text) == expected


@pytest.mark.parametrize("text", ["- [] a", "- [X] a", "* [ ] a", "-[ ] a", "- [ ]a", "1. a", "text"])
def test_match_checkbox_rejects_other_lines(text):
    assert match_checkbox(text) is None


def test_leading_whitespace_is_not_normalized():
    assert leading_whitespace("\t  x") == "\t  "
    assert leading_whitespace("x") == ""
    assert leading_whitespace("") == ""


@pytest.mark.parametrize(
    "indent, parent, expected",
    [
        ("\t", "", True),
        ("    ", "  ", True),
        ("  ", "  ", False),
        ("", "\t", False),
        ("\t", "  ", False),
        ("  \t", "\t", False),
    ],
)
def test_is_nested_under(indent, parent, expected):
    assert is_nested_under(indent, parent) is expected


@pytest.mark.parametrize(
    "text, ordinal, expected",
    [
        ("1. a", 2, "2. a"),
        ("  9. nine", 10, "  10. nine"),
        ("10. ten", 9, "9. ten"),
        ("09. a", 3, "3. a"),
        ("1.\ttab", 4, "4.\ttab"),
        ("1. 2. nested text", 5, "5. 2. nested text"),
    ],
)
def test_with_ordinal_only_rewrites_the_number(text, ordinal, expected):
    assert with_ordinal(text, match_numbered(text), ordinal) == expected
