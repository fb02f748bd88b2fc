"""Tests for list continuation, termination and indentation."""

from __future__ import annotations

import pytest

from freewrite.markdown import (
    INDENT_UNIT,
    EditBatch,
    ListKind,
    apply_edits,
    classify_line,
    continue_list,
    lists,
)
from freewrite.markdown.lists import (
    ListContext,
    adjust_selection,
    indent_lines,
    outdented_indent,
    previous_ordered_item,
    renumber_ordered_list,
)
from freewrite.ranges import TextRange


def _newline(text: str, offset: int | None = None) -> tuple[str, int | None]:
    """Simulate Return at ``offset`` (default: end of text)."""
    caret = len(text) if offset is None else offset
    batch = continue_list(text, TextRange(caret, 0))
    assert batch is not None
    return apply_edits(text, batch), batch.caret


@pytest.mark.parametrize(
    ("line", "kind"),
    [
        ("- item", ListKind.UNORDERED),
        ("* item", ListKind.UNORDERED),
        ("3) item", ListKind.ORDERED),
        ("- [x] done", ListKind.CHECKLIST),
        ("    + nested", ListKind.UNORDERED),
    ],
)
def test_classify_line_kinds(line: str, kind: ListKind) -> None:
    """Checklists win over unordered markers; numbers are ordered."""
    context = classify_line(line)
    assert context is not None
    assert context.kind is kind


@pytest.mark.parametrize("line", ["plain text", "-dash", "1.no space", "#1. heading"])
def test_classify_line_rejects_non_list_lines(line: str) -> None:
    """Lines without a marker followed by whitespace are not list items."""
    assert classify_line(line) is None


def test_unordered_item_continues_with_same_marker() -> None:
    """Return after a bullet starts a new bullet."""
    assert _newline("- buy milk") == ("- buy milk\n- ", 13)


def test_empty_unordered_item_ends_the_list() -> None:
    """Return on an empty bullet removes the marker."""
    assert _newline("- ") == ("\n", 1)


def test_ordered_item_increments_number() -> None:
    """Return after an ordered item inserts the next number."""
    assert _newline("1. first") == ("1. first\n2. ", 12)


def test_ordered_item_keeps_separator_and_indent() -> None:
    """Nested ordered items keep their indent and separator."""
    text = f"{INDENT_UNIT}4) four"
    updated, _ = _newline(text)
    assert updated == f"{text}\n{INDENT_UNIT}5) "


def test_inserting_an_item_renumbers_following_siblings() -> None:
    """Items after the insertion point shift up by one."""
    updated, caret = _newline("1. a\n2. b\n3. c", offset=4)
    assert updated == "1. a\n2. \n3. b\n4. c"
    assert caret == 8


def test_checklist_continues_unchecked() -> None:
    """A new checklist item always starts unchecked."""
    assert _newline("- [x] done") == ("- [x] done\n- [ ] ", 17)


def test_empty_nested_ordered_item_continues_parent_list() -> None:
    """An empty nested item is replaced by the parent's next number."""
    text = f"1. one\n{INDENT_UNIT}1. sub\n{INDENT_UNIT}2. "
    updated, caret = _newline(text)

    assert updated == f"1. one\n{INDENT_UNIT}1. sub\n2. "
    assert caret == len(updated)


def test_empty_top_level_ordered_item_ends_the_list() -> None:
    """Without a parent list the empty item is simply removed."""
    assert _newline("1. a\n2. ") == ("1. a\n\n", 6)


def test_non_list_line_falls_through() -> None:
    """Plain lines leave the newline to the host."""
    assert continue_list("plain", TextRange(5, 0)) is None


def test_renumber_stops_at_blank_line() -> None:
    """A blank line ends a top-level list."""
    text = "5. a\n9. b\n\n7. c"
    edits = renumber_ordered_list(text, 0, "", 1)

    assert apply_edits(text, EditBatch(tuple(edits))) == "1. a\n2. b\n\n7. c"


def test_renumber_stops_at_shallower_text() -> None:
    """Text shallower than a nested list ends its scope."""
    text = f"{INDENT_UNIT}1. a\n{INDENT_UNIT}5. b\nplain\n{INDENT_UNIT}9. c"
    edits = renumber_ordered_list(text, 0, INDENT_UNIT, 1)

    assert apply_edits(text, EditBatch(tuple(edits))) == (
        f"{INDENT_UNIT}1. a\n{INDENT_UNIT}2. b\nplain\n{INDENT_UNIT}9. c"
    )


def test_renumber_skips_deeper_items() -> None:
    """Nested items do not consume sibling numbers."""
    text = f"1. a\n{INDENT_UNIT}1. x\n5. b"
    edits = renumber_ordered_list(text, 0, "", 1)
    assert apply_edits(text, EditBatch(tuple(edits))) == f"1. a\n{INDENT_UNIT}1. x\n2. b"


def test_previous_ordered_item_matches_indent_exactly() -> None:
    """The backwards scan only accepts items at the requested indent."""
    text = f"3) top\n{INDENT_UNIT}1. sub\n"
    item = previous_ordered_item(text, len(text), "")

    assert item is not None
    assert (item.number, item.separator) == (3, ")")
    assert previous_ordered_item(text, len(text), "  ") is None


def test_outdented_indent() -> None:
    """One outdent step removes an indent unit or a tab."""
    assert outdented_indent("") is None
    assert outdented_indent(INDENT_UNIT * 2) == INDENT_UNIT
    assert outdented_indent("\t\t") == "\t"
    assert outdented_indent("  ") == ""


def test_tab_indents_ordered_lines_with_running_counter() -> None:
    """Indenting ordered lines restarts numbering from one."""
    text = "3. a\n4. b"
    batch = indent_lines(text, TextRange(0, len(text)))

    assert batch is not None
    updated = apply_edits(text, batch)
    assert updated == f"{INDENT_UNIT}1. a\n{INDENT_UNIT}2. b"
    assert batch.selection == TextRange(0, len(updated))


def test_counter_resets_after_non_ordered_line() -> None:
    """A non-ordered line between items restarts the counter."""
    text = "3. a\nnote\n8. b"
    batch = indent_lines(text, TextRange(0, len(text)))
    assert apply_edits(text, batch) == (
        f"{INDENT_UNIT}1. a\n{INDENT_UNIT}note\n{INDENT_UNIT}1. b"
    )


def test_shift_tab_outdents_and_moves_caret() -> None:
    """Outdent removes one indent unit and keeps the caret on the line."""
    text = f"{INDENT_UNIT}- a"
    batch = indent_lines(text, TextRange(6, 0), outdent=True)

    assert batch is not None
    assert apply_edits(text, batch) == "- a"
    assert batch.selection == TextRange(0, 0)


def test_outdent_without_indent_changes_nothing() -> None:
    """Lines with no leading whitespace are left alone."""
    batch = indent_lines("- a", TextRange(0, 0), outdent=True)
    assert batch is not None
    assert batch.edits == ()


def test_tab_in_plain_text_inserts_indent_at_caret() -> None:
    """Outside a list, Tab inserts an indent unit at the caret."""
    batch = indent_lines("abc", TextRange(1, 0))

    assert batch is not None
    assert apply_edits("abc", batch) == f"a{INDENT_UNIT}bc"
    assert batch.caret == 1 + len(INDENT_UNIT)


def test_tab_in_empty_buffer_inserts_indent() -> None:
    """An empty buffer gets one indent unit and the caret after it."""
    batch = indent_lines("", TextRange(0, 0))

    assert batch is not None
    assert apply_edits("", batch) == INDENT_UNIT
    assert batch.selection == TextRange(len(INDENT_UNIT), 0)
    assert indent_lines("", TextRange(0, 0), outdent=True).edits == ()


@pytest.mark.parametrize(
    ("change", "delta", "start", "end", "length", "expected"),
    [
        (0, 3, 5, 8, 3, (8, 11)),
        (5, 3, 5, 5, 0, (8, 8)),
        (5, 3, 5, 8, 3, (5, 11)),
        (6, 3, 5, 8, 3, (5, 11)),
        (9, 3, 5, 8, 3, (5, 8)),
        (0, 0, 5, 8, 3, (5, 8)),
    ],
)
def test_adjust_selection(
    change: int,
    delta: int,
    start: int,
    end: int,
    length: int,
    expected: tuple[int, int],
) -> None:
    """Selections shift, grow or stay depending on where the edit lands."""
    assert adjust_selection(change, delta, start, end, length) == expected


def test_ordered_context_without_number_is_rejected(monkeypatch) -> None:
    """An ordered context missing its number is an error, not a guess."""
    broken = ListContext(kind=ListKind.ORDERED, indent="", prefix="1. ", content="a")
    monkeypatch.setattr(lists, "classify_line", lambda line: broken)

    with pytest.raises(ValueError, match="missing its number"):
        continue_list("1. a", TextRange(4, 0))
