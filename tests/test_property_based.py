from __future__ import annotations

import string

from hypothesis import assume, given
from hypothesis import strategies as st

from auto_renumber.checkbox import CheckboxReorderer
from auto_renumber.classifier import match_checkbox, match_numbered
from auto_renumber.locator import find_scope_bounds
from auto_renumber.models import Change
from auto_renumber.renumberer import Renumberer
from auto_renumber.strategy import NumberingStrategy

words = st.text(alphabet=string.ascii_lowercase, min_size=1, max_size=8)
ordinals = st.integers(min_value=0, max_value=300)
indents = st.sampled_from(["", "  ", "\t", "    "])


def _apply(lines: list[str], changes: list[Change]) -> list[str]:
    updated = list(lines)
    for change in changes:
        updated[change.line] = change.text
    return updated


def _numbered(indent: str, written: list[int], labels: list[str]) -> list[str]:
    return [f"{indent}{number}. {label}" for number, label in zip(written, labels)]


@given(st.lists(ordinals, min_size=1, max_size=15), indents, st.sampled_from(list(NumberingStrategy)))
def test_renumbering_twice_changes_nothing_the_second_time(written, indent, strategy):
    lines = _numbered(indent, written, ["item"] * len(written))
    renumberer = Renumberer(strategy)

    fixed = _apply(lines, renumberer.renumber_from_line(lines, 0, local_only=False).changes)

    assert renumberer.renumber_from_line(fixed, 0, local_only=False).changes == []
    assert renumberer.renumber_from_line(fixed, 0, local_only=True).changes == []


@given(
    st.lists(words, max_size=3),
    st.lists(ordinals, min_size=1, max_size=15),
    st.integers(min_value=0, max_value=14),
)
def test_start_from_one_numbers_block_from_one(prefix_words, written, trigger):
    assume(trigger < len(written))
    prefix = [f"# {word}" for word in prefix_words]
    lines = prefix + _numbered("", written, ["x"] * len(written))
    block_start = len(prefix)

    renumberer = Renumberer(NumberingStrategy.START_FROM_ONE)
    fixed = _apply(lines, renumberer.renumber_block(lines, block_start + trigger).changes)

    for i in range(block_start, len(lines)):
        assert match_numbered(fixed[i]).ordinal == i - block_start + 1


@given(
    ordinals,
    st.lists(st.sampled_from(["\tnested", "\t1. sub", "\t- [ ] sub"]), max_size=3),
    st.lists(ordinals, min_size=1, max_size=10),
)
def test_dynamic_continues_preceding_sibling(sibling, nested, written):
    lines = [f"{sibling}. first", *nested, *_numbered("", written, ["y"] * len(written))]
    block_start = 1 + len(nested)

    renumberer = Renumberer(NumberingStrategy.DYNAMIC)
    fixed = _apply(lines, renumberer.renumber_from_line(lines, block_start, local_only=False).changes)

    for offset in range(len(written)):
        assert match_numbered(fixed[block_start + offset]).ordinal == sibling + 1 + offset


@st.composite
def single_line_edits(draw):
    """A block consistent under some strategy, one edit, and the edited line."""
    strategy = draw(st.sampled_from(list(NumberingStrategy)))
    length = draw(st.integers(min_value=1, max_value=12))
    base = 1
    if strategy is NumberingStrategy.DYNAMIC:
        base = draw(st.integers(min_value=1, max_value=50))
    lines = [f"{base + i}. item {i}" for i in range(length)]
    kind = draw(st.sampled_from(["retype", "insert", "delete"]))
    position = draw(st.integers(min_value=0, max_value=length - 1))

    if kind == "retype":
        lines[position] = f"{draw(ordinals)}. item {position}"
    elif kind == "insert":
        position = draw(st.integers(min_value=0, max_value=length))
        lines.insert(position, f"{draw(ordinals)}. new")
    else:
        del lines[position]
    return strategy, lines, position


@given(single_line_edits())
def test_local_renumbering_after_single_edit_matches_full_block(edit):
    strategy, lines, position = edit
    renumberer = Renumberer(strategy)

    fixed = _apply(lines, renumberer.renumber_from_line(lines, position, local_only=True).changes)

    assert renumberer.renumber_block(fixed, 0).changes == []


@given(
    indents,
    st.lists(
        st.tuples(st.booleans(), st.sampled_from(["same", "deeper", "text", "lesser"])),
        min_size=1,
        max_size=12,
    ),
)
def test_scope_walk_steps_over_deeper_lines_only(indent, rows):
    scope_indent = indent + "  "
    lines = [f"{scope_indent}- [ ] head"]
    for checked, kind in rows:
        mark = "x" if checked else " "
        if kind == "same":
            lines.append(f"{scope_indent}- [{mark}] item")
        elif kind == "deeper":
            lines.append(f"{scope_indent}\t- [{mark}] child")
        elif kind == "text":
            lines.append(f"{scope_indent}plain text")
        else:
            lines.append(f"{indent}- [{mark}] outer")

    bounds = find_scope_bounds(lines, 0)

    assert bounds.start == 0
    for i in range(1, bounds.limit):
        assert lines[i].startswith(scope_indent)
        assert "plain text" not in lines[i]
    if bounds.limit < len(lines):
        stopper = lines[bounds.limit]
        assert "plain text" in stopper or not stopper.startswith(scope_indent)


@given(
    st.integers(min_value=0, max_value=6),
    st.integers(min_value=0, max_value=6),
    st.integers(min_value=0, max_value=11),
    st.booleans(),
)
def test_reorder_is_a_stable_single_line_move(leading_count, trailing_count, toggle, sort_to_bottom):
    total = leading_count + trailing_count
    assume(total > 0 and toggle < total)
    first_state = not sort_to_bottom
    states = [first_state] * leading_count + [not first_state] * trailing_count
    states[toggle] = not states[toggle]
    lines = [f"- [{'x' if state else ' '}] item{i}" for i, state in enumerate(states)]
    original = list(lines)

    touched = CheckboxReorderer(sort_to_bottom=sort_to_bottom).reorder(lines, toggle)

    result_states = [match_checkbox(line).checked for line in lines]
    leading = [state == first_state for state in result_states]
    assert leading == sorted(leading, reverse=True)
    assert sorted(lines) == sorted(original)

    moved = original[toggle]
    assert [line for line in lines if line != moved] == [
        line for line in original if line != moved
    ]
    for state in (True, False):
        group = [line for line in lines if match_checkbox(line).checked is state]
        assert group == sorted(group, key=original.index)

    if touched is None:
        assert lines == original
    else:
        assert lines[touched.start : touched.limit] != original[touched.start : touched.limit]
        assert lines[: touched.start] == original[: touched.start]
        assert lines[touched.limit :] == original[touched.limit :]
