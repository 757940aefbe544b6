import pytest

from auto_renumber.editor import LineDocument
from auto_renumber.exceptions import EditRejectedError
from auto_renumber.models import Change, Position, Selection


def test_from_text_tracks_trailing_newline():
    document = LineDocument.from_text("1. a\n2. b\n")

    assert document.lines == ("1. a", "2. b")
    assert document.to_text() == "1. a\n2. b\n"


def test_from_text_without_trailing_newline():
    document = LineDocument.from_text("1. a\n2. b")

    assert document.lines == ("1. a", "2. b")
    assert document.to_text() == "1. a\n2. b"


def test_empty_document_has_one_blank_line():
    assert LineDocument.from_text("").lines == ("",)
    assert LineDocument([]).line_count() == 1


def test_atomic_edit_is_all_or_nothing():
    document = LineDocument(["a", "b"])

    with pytest.raises(EditRejectedError) as excinfo:
        document.apply_atomic_edit([Change(0, "x"), Change(2, "y")])

    assert excinfo.value.line == 2
    assert "line 3" in str(excinfo.value)
    assert document.lines == ("a", "b")
    assert document.edit_count == 0


def test_atomic_edit_rejects_multi_line_text():
    document = LineDocument(["a"])

    with pytest.raises(EditRejectedError):
        document.apply_atomic_edit([Change(0, "x\ny")])


def test_selection_top_line():
    document = LineDocument(["a", "b", "c"])
    document.select(Position(2, 0), Position(1, 1))

    assert document.get_selection().top_line == 1
    assert Selection(Position(0), Position(3)).top_line == 0


def test_host_side_edits_move_cursor():
    document = LineDocument(["1. a"])

    inserted = document.insert_lines(1, ["1. b", "1. c"])
    assert inserted == 2
    assert document.lines == ("1. a", "1. b", "1. c")
    assert document.get_selection().head == Position(2, 4)

    document.set_line(0, "1. aa")
    assert document.get_selection().head == Position(0, 5)
