"""Character ranges over a text buffer and line/paragraph lookups."""


from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class TextRange:
    """Half-open ``[offset, offset + length)`` span over a text buffer."""

    offset: int
    length: int = 0

    @property
    def end(self) -> int:
        """Return the exclusive end offset."""
        return self.offset + self.length

    @classmethod
    def from_bounds(cls, start: int, end: int) -> "TextRange":
        """Build a range from start/end offsets, clamping negative lengths."""
        return cls(start, max(0, end - start))

    def intersection(self, other: "TextRange") -> "TextRange":
        """Return the overlap with ``other``; zero-length when disjoint."""
        start = max(self.offset, other.offset)
        end = min(self.end, other.end)
        if end <= start:
            return TextRange(0, 0)
        return TextRange(start, end - start)

    def intersects(self, other: "TextRange") -> bool:
        """Return whether the two ranges share at least one character."""
        return self.intersection(other).length > 0

    def contains(self, location: int) -> bool:
        """Return whether ``location`` falls inside the range."""
        return self.offset <= location < self.end

    def shifted(self, delta: int) -> "TextRange":
        """Return the same span moved by ``delta`` characters."""
        return TextRange(self.offset + delta, self.length)

    def clamped(self, text_length: int) -> "TextRange":
        """Clamp both ends into ``[0, text_length]``."""
        start = min(max(self.offset, 0), text_length)
        end = min(max(self.end, start), text_length)
        return TextRange(start, end - start)

    def slice(self, text: str) -> str:
        """Return the substring covered by this range."""
        return text[self.offset : self.end]

    def to_payload(self) -> dict[str, int]:
        """Serialize the range for JSON output."""
        return {"offset": self.offset, "length": self.length}


def clamp_location(text: str, location: int) -> int:
    """Clamp a lookup offset to ``max(0, len(text) - 1)``."""
    return min(max(location, 0), max(0, len(text) - 1))


def line_range(text: str, location: int, length: int = 0) -> TextRange:
    """Return the full line(s) covering a range, terminators included.

    The result starts at the beginning of the line containing ``location``
    and ends after the newline of the line containing the last character of
    the range. A location at the very end of a newline-terminated buffer
    yields an empty range there.
    """
    size = len(text)
    location = min(max(location, 0), size)
    start = text.rfind("\n", 0, location) + 1
    last = location + length - 1 if length > 0 else location
    last = min(max(last, location), size)
    newline = text.find("\n", last)
    end = size if newline < 0 else newline + 1
    return TextRange(start, end - start)


def paragraph_range(text: str, location: int, length: int = 0) -> TextRange:
    """Return the blank-line delimited paragraph covering a range."""
    covered = line_range(text, location, length)
    if not line_content(text, covered).strip():
        return covered
    start = covered.offset
    while start > 0:
        previous = line_range(text, start - 1)
        if not line_content(text, previous).strip():
            break
        start = previous.offset
    end = covered.end
    while end < len(text):
        following = line_range(text, end)
        if not line_content(text, following).strip():
            break
        end = following.end
    return TextRange(start, end - start)


def line_content(text: str, span: TextRange) -> str:
    """Return the line text without its trailing newline."""
    line = span.slice(text)
    if line.endswith("\n"):
        return line[:-1]
    return line


def line_ranges(text: str, selection: TextRange) -> list[TextRange]:
    """Enumerate every line touched by a selection.

    A non-empty selection that ends right after a newline does not pull in
    the following line.
    """
    if not text:
        return []
    selection_end = selection.end
    if selection.length > 0 and selection_end > 0 and text[selection_end - 1] in "\r\n":
        selection_end = max(selection.offset, selection_end - 1)
    covered = line_range(
        text, selection.offset, max(0, selection_end - selection.offset)
    )
    ranges: list[TextRange] = []
    current = covered.offset
    while current < covered.end:
        span = line_range(text, current)
        ranges.append(span)
        current = span.end
    return ranges


def next_line_start(text: str, location: int) -> int | None:
    """Return the offset of the line after the one containing ``location``."""
    if not text:
        return None
    span = line_range(text, clamp_location(text, location))
    return span.end if span.end <= len(text) else None


def leading_whitespace(line: str) -> str:
    """Return the run of spaces and tabs that starts ``line``."""
    stripped = line.lstrip(" \t")
    return line[: len(line) - len(stripped)]
