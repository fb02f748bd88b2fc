"""Tests for range arithmetic and line/paragraph lookups."""

from __future__ import annotations

import pytest

from freewrite.ranges import (
    TextRange,
    clamp_location,
    line_range,
    line_ranges,
    next_line_start,
    paragraph_range,
)


def test_intersection_is_empty_for_adjacent_ranges() -> None:
    """Touching ranges share no characters."""
    assert not TextRange(0, 3).intersects(TextRange(3, 2))
    assert TextRange(0, 4).intersection(TextRange(3, 2)) == TextRange(3, 1)


def test_clamped_keeps_range_inside_text() -> None:
    """Both ends should be pulled into ``[0, len]``."""
    assert TextRange(-2, 5).clamped(10) == TextRange(0, 3)
    assert TextRange(8, 5).clamped(10) == TextRange(8, 2)
    assert TextRange(12, 1).clamped(10) == TextRange(10, 0)


@pytest.mark.parametrize(
    ("text", "location", "expected"),
    [("", 5, 0), ("abc", -1, 0), ("abc", 3, 2), ("abc", 1, 1)],
)
def test_clamp_location(text: str, location: int, expected: int) -> None:
    """Lookup offsets clamp to the last character."""
    assert clamp_location(text, location) == expected


def test_line_range_includes_newline() -> None:
    """The line range should end after the line terminator."""
    assert line_range("ab\ncd", 1) == TextRange(0, 3)
    assert line_range("ab\ncd", 3) == TextRange(3, 2)


def test_line_range_at_end_of_terminated_buffer_is_empty() -> None:
    """A caret after the final newline sits on an empty last line."""
    assert line_range("abc\n", 4) == TextRange(4, 0)


def test_line_range_spans_multiple_lines() -> None:
    """A selection over two lines covers both, terminators included."""
    assert line_range("ab\ncd\nef", 1, 3) == TextRange(0, 6)


def test_paragraph_range_stops_at_blank_lines() -> None:
    """Paragraphs are runs of non-blank lines."""
    text = "a\nb\n\nc"
    assert paragraph_range(text, 0) == TextRange(0, 4)
    assert paragraph_range(text, 5) == TextRange(5, 1)
    assert paragraph_range(text, 4) == TextRange(4, 1)


def test_line_ranges_ignores_line_after_trailing_newline() -> None:
    """A selection ending right after a newline keeps to its own lines."""
    text = "one\ntwo\nthree"
    assert line_ranges(text, TextRange(0, 4)) == [TextRange(0, 4)]
    assert line_ranges(text, TextRange(2, 4)) == [TextRange(0, 4), TextRange(4, 4)]
    assert line_ranges("", TextRange(0, 0)) == []


def test_next_line_start() -> None:
    """The next line begins right after the current line's newline."""
    assert next_line_start("ab\ncd", 0) == 3
    assert next_line_start("ab\ncd", 4) == 5
    assert next_line_start("", 0) is None
