"""List continuation, termination, renumbering and indentation.

Every operation reads an immutable buffer snapshot and returns an
:class:`EditBatch` for the host to apply. Edits inside a batch are applied
in order, and each edit's range refers to the buffer as left by the edits
before it. Renumbering edits are emitted from the end of the buffer
backwards so their ranges stay valid.
"""


import re
from dataclasses import dataclass, field
from enum import StrEnum

from freewrite.ranges import (
    TextRange,
    leading_whitespace,
    line_content,
    line_range,
    line_ranges,
    next_line_start,
)

INDENT_UNIT = "      "

CHECKLIST_RE = re.compile(
    r"^(?P<prefix>(?P<indent>[ \t]*)[-*+][ \t]+\[(?: |x|X)\][ \t]+)(?P<content>.*)$"
)
ORDERED_RE = re.compile(
    r"^(?P<indent>[ \t]*)(?P<number>\d+)(?P<separator>[.)])[ \t]+(?P<content>.*)$"
)
UNORDERED_RE = re.compile(r"^(?P<prefix>(?P<indent>[ \t]*)[-*+][ \t]+)(?P<content>.*)$")
CHECKBOX_RE = re.compile(r"\[(?: |x|X)\]")


class ListKind(StrEnum):
    """Marker kind of a list line."""

    UNORDERED = "unordered"
    ORDERED = "ordered"
    CHECKLIST = "checklist"


@dataclass(frozen=True)
class ListContext:
    """What a list line looks like, derived fresh on every keystroke."""

    kind: ListKind
    indent: str
    prefix: str
    content: str
    number: int | None = None
    separator: str | None = None

    @property
    def is_empty(self) -> bool:
        """Return whether the item has no content after its marker."""
        return not self.content.strip(" \t")


@dataclass(frozen=True)
class OrderedItem:
    """Number and separator of an ordered list line."""

    number: int
    separator: str


@dataclass(frozen=True)
class EditIntent:
    """Replace ``range`` with ``replacement`` and optionally move the caret."""

    range: TextRange
    replacement: str
    caret: int | None = None


@dataclass(frozen=True)
class EditBatch:
    """Edits the host applies atomically, plus the selection afterwards."""

    edits: tuple[EditIntent, ...] = field(default_factory=tuple)
    selection: TextRange | None = None

    @property
    def caret(self) -> int | None:
        """Return the final caret offset requested by the batch."""
        if self.selection is not None:
            return self.selection.offset
        for edit in self.edits:
            if edit.caret is not None:
                return edit.caret
        return None


def apply_edits(text: str, batch: EditBatch) -> str:
    """Apply a batch to ``text`` the way a host would."""
    for edit in batch.edits:
        span = edit.range.clamped(len(text))
        text = text[: span.offset] + edit.replacement + text[span.end :]
    return text


def classify_line(line: str) -> ListContext | None:
    """Classify a line as checklist, ordered or unordered, in that order."""
    match = CHECKLIST_RE.match(line)
    if match:
        return ListContext(
            kind=ListKind.CHECKLIST,
            indent=match["indent"],
            prefix=match["prefix"],
            content=match["content"],
        )
    match = ORDERED_RE.match(line)
    if match:
        return ListContext(
            kind=ListKind.ORDERED,
            indent=match["indent"],
            prefix=line[: match.start("content")],
            content=match["content"],
            number=int(match["number"]),
            separator=match["separator"],
        )
    match = UNORDERED_RE.match(line)
    if match:
        return ListContext(
            kind=ListKind.UNORDERED,
            indent=match["indent"],
            prefix=match["prefix"],
            content=match["content"],
        )
    return None


def is_list_line(line: str) -> bool:
    """Return whether ``line`` is any kind of list item."""
    return classify_line(line) is not None


def outdented_indent(indent: str) -> str | None:
    """Return the indent one level up, or ``None`` at the top level."""
    if not indent:
        return None
    if indent.startswith(INDENT_UNIT):
        return indent[len(INDENT_UNIT) :]
    if indent.startswith("\t"):
        return indent[1:]
    return ""


def previous_ordered_item(text: str, before: int, indent: str) -> OrderedItem | None:
    """Scan backwards for the closest ordered item at exactly ``indent``."""
    if not text:
        return None
    search = min(max(before - 1, 0), len(text) - 1)
    while search >= 0:
        span = line_range(text, search)
        match = ORDERED_RE.match(line_content(text, span))
        if match and match["indent"] == indent:
            return OrderedItem(int(match["number"]), match["separator"])
        if span.offset == 0:
            break
        search = span.offset - 1
    return None


def renumber_ordered_list(
    text: str,
    start: int,
    indent: str,
    starting_number: int,
) -> list[EditIntent]:
    """Renumber sibling items at ``indent`` from ``start`` until the list ends.

    A blank line no deeper than the list, or an item or text line
    shallower than it, ends the scope. Deeper lines are skipped.
    """
    replacements: list[EditIntent] = []
    number = starting_number
    indent_length = len(indent)
    current = start
    while current < len(text):
        span = line_range(text, current)
        content = line_content(text, span)
        leading = len(leading_whitespace(content))

        if not content.strip(" \t"):
            if leading <= indent_length:
                break
            current = span.end
            continue

        match = ORDERED_RE.match(content)
        if match:
            if match["indent"] == indent:
                expected = str(number)
                if match["number"] != expected:
                    replacements.append(
                        EditIntent(
                            TextRange.from_bounds(
                                span.offset + match.start("number"),
                                span.offset + match.end("number"),
                            ),
                            expected,
                        )
                    )
                number += 1
            elif len(match["indent"]) < indent_length:
                break
        elif leading < indent_length:
            break
        current = span.end
    replacements.reverse()
    return replacements


def _renumber_after(
    text: str, caret: int, indent: str, starting_number: int
) -> list[EditIntent]:
    following = next_line_start(text, caret)
    if following is None:
        return []
    return renumber_ordered_list(text, following, indent, starting_number)


def continue_list(text: str, affected: TextRange) -> EditBatch | None:
    """Handle a newline typed at ``affected`` inside a list line.

    Returns ``None`` when the line is not a list item, so the host falls
    back to inserting a plain newline.
    """
    span = line_range(text, affected.offset, affected.length)
    line_string = span.slice(text)
    has_newline = line_string.endswith("\n")
    context = classify_line(line_content(text, span))
    if context is None:
        return None

    if context.is_empty:
        if context.kind is ListKind.ORDERED:
            return _close_ordered_item(text, span, context, has_newline)
        return EditBatch((EditIntent(span, "\n", caret=span.offset + 1),))

    if context.kind is ListKind.ORDERED:
        if context.number is None or context.separator is None:
            raise ValueError("Ordered list line is missing its number")
        next_number = context.number + 1
        continuation = f"\n{context.indent}{next_number}{context.separator} "
        caret = affected.offset + len(continuation)
        insert = EditIntent(affected, continuation, caret=caret)
        updated = apply_edits(text, EditBatch((insert,)))
        renumber = _renumber_after(updated, caret, context.indent, next_number + 1)
        return EditBatch((insert, *renumber))

    prefix = context.prefix
    if context.kind is ListKind.CHECKLIST:
        prefix = CHECKBOX_RE.sub("[ ]", prefix, count=1)
    continuation = "\n" + prefix
    return EditBatch(
        (EditIntent(affected, continuation, caret=affected.offset + len(continuation)),)
    )


def _close_ordered_item(
    text: str, span: TextRange, context: ListContext, has_newline: bool
) -> EditBatch:
    """End an empty ordered item, continuing the parent list when there is one."""
    terminate = EditBatch((EditIntent(span, "\n", caret=span.offset + 1),))
    parent_indent = outdented_indent(context.indent)
    if parent_indent is None:
        return terminate
    parent = previous_ordered_item(text, span.offset, parent_indent)
    if parent is None:
        return terminate

    next_number = parent.number + 1
    parent_line = f"{parent_indent}{next_number}{parent.separator} "
    caret = span.offset + len(parent_line)
    replace = EditIntent(span, parent_line + "\n" if has_newline else parent_line, caret=caret)
    updated = apply_edits(text, EditBatch((replace,)))
    renumber = _renumber_after(updated, caret, parent_indent, next_number + 1)
    return EditBatch((replace, *renumber), selection=TextRange(caret, 0))


def removable_indent_length(line: str) -> int:
    """Return how many leading characters one outdent step removes."""
    if not line:
        return 0
    if line.startswith("\t"):
        return 1
    spaces = len(line) - len(line.lstrip(" "))
    return min(spaces, len(INDENT_UNIT))


def replace_ordered_number(line: str, number: int) -> str:
    """Rewrite the number of an ordered list line."""
    match = ORDERED_RE.match(line)
    if match is None:
        return line
    return line[: match.start("number")] + str(number) + line[match.end("number") :]


def adjust_selection(
    change_location: int,
    delta: int,
    start: int,
    end: int,
    length: int,
) -> tuple[int, int]:
    """Shift selection endpoints after an edit changed the text by ``delta``."""
    if delta == 0:
        return start, end
    if change_location < start:
        return start + delta, end + delta
    if change_location == start:
        if length == 0:
            return start + delta, end + delta
        return start, end + delta
    if start < change_location <= end:
        return start, end + delta
    return start, end


def indent_lines(text: str, selection: TextRange, outdent: bool = False) -> EditBatch | None:
    """Indent (Tab) or outdent (Shift-Tab) every line touched by ``selection``.

    Indenting an ordered item restarts its number from a running counter
    that resets to 1 after any non-ordered line. Returns ``None`` when the
    keystroke should fall through to the host.
    """
    if not text:
        if outdent:
            return EditBatch(selection=selection)
        caret = selection.offset + len(INDENT_UNIT)
        return EditBatch(
            (EditIntent(selection, INDENT_UNIT, caret=caret),),
            selection=TextRange(caret, 0),
        )

    spans = line_ranges(text, selection)
    if not spans:
        return None

    if selection.length == 0 and not outdent:
        if not is_list_line(line_content(text, spans[0])):
            caret = selection.offset + len(INDENT_UNIT)
            return EditBatch(
                (EditIntent(selection, INDENT_UNIT, caret=caret),),
                selection=TextRange(caret, 0),
            )

    replacements: list[EditIntent] = []
    counter = 0
    previous_was_ordered = False
    for span in spans:
        content = line_content(text, span)
        has_newline = span.slice(text).endswith("\n")
        updated = content
        if outdent:
            removal = removable_indent_length(updated)
            if removal == 0:
                continue
            updated = updated[removal:]
        else:
            if ORDERED_RE.match(updated):
                counter = counter + 1 if previous_was_ordered else 1
                previous_was_ordered = True
                updated = replace_ordered_number(updated, counter)
            else:
                previous_was_ordered = False
            updated = INDENT_UNIT + updated
        if has_newline:
            updated += "\n"
        replacements.append(EditIntent(span, updated))

    start = selection.offset
    end = selection.end
    for replacement in reversed(replacements):
        delta = len(replacement.replacement) - replacement.range.length
        start, end = adjust_selection(
            replacement.range.offset, delta, start, end, selection.length
        )
    start = max(0, start)
    end = max(start, end)
    return EditBatch(tuple(reversed(replacements)), selection=TextRange(start, end - start))
