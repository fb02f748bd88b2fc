"""Active-range lookup for typewriter focus and scroll targeting.

The active range is the line, sentence or paragraph containing the primary
selection. All lookups clamp the selection offset to ``max(0, len - 1)`` so
a caret at the end of the buffer resolves to the last line.

Scroll helpers only do geometry on numbers supplied by the host (caret
rectangle, visible height, content height); scrolling itself is the host's
job.
"""


from dataclasses import dataclass

from freewrite.config import HighlightScope, StyleConfig
from freewrite.linguistics import LinguisticService
from freewrite.ranges import TextRange, clamp_location, line_range, paragraph_range

REVEAL_MARGIN = 12.0


@dataclass(frozen=True)
class FocusRanges:
    """Ranges one highlight pass needs from the selection."""

    token_active: TextRange | None
    highlight: TextRange | None
    mark_line: TextRange | None


def active_line_range(text: str, selection: TextRange | None) -> TextRange | None:
    """Return the line(s) covering the selection, or ``None`` for no text."""
    if selection is None or not text or selection.offset < 0:
        return None
    location = clamp_location(text, selection.offset)
    return line_range(text, location, selection.length)


def sentence_range(
    text: str, location: int, segmenter: LinguisticService
) -> TextRange | None:
    """Return the sentence containing ``location`` (end offset inclusive)."""
    if not text:
        return None
    location = clamp_location(text, location)
    for sentence in segmenter.sentences(text):
        if sentence.offset <= location <= sentence.end:
            return sentence
    return None


def highlight_range(
    text: str,
    selection: TextRange | None,
    scope: HighlightScope,
    segmenter: LinguisticService | None = None,
) -> TextRange | None:
    """Return the active range for ``scope`` around the selection."""
    if selection is None or not text or selection.offset < 0:
        return None
    location = clamp_location(text, selection.offset)
    if scope is HighlightScope.LINE:
        return line_range(text, location, selection.length)
    if scope is HighlightScope.PARAGRAPH:
        return paragraph_range(text, location, selection.length)
    if segmenter is None:
        return None
    return sentence_range(text, location, segmenter)


def focus_ranges(
    text: str,
    selection: TextRange | None,
    config: StyleConfig,
    segmenter: LinguisticService | None = None,
) -> FocusRanges:
    """Derive the token, fade and current-line ranges for one pass."""
    token_active = active_line_range(text, selection)
    if not config.typewriter_enabled:
        return FocusRanges(token_active=token_active, highlight=None, mark_line=None)
    highlight = highlight_range(text, selection, config.highlight_scope, segmenter)
    return FocusRanges(
        token_active=token_active,
        highlight=highlight or token_active,
        mark_line=token_active if config.mark_current_line else None,
    )


def centered_scroll_offset(
    caret_mid_y: float,
    caret_height: float,
    visible_height: float,
    content_height: float,
) -> float:
    """Return the vertical origin that centers the caret line.

    Content is padded by half a line so the last line can reach the center,
    and the result is clamped into the scrollable extent.
    """
    desired = caret_mid_y - visible_height * 0.5
    padded_content = content_height + max(0.0, caret_height * 0.5)
    max_origin = max(0.0, padded_content - visible_height)
    return min(max(desired, 0.0), max_origin)


def reveal_scroll_offset(
    caret_min_y: float,
    caret_max_y: float,
    visible_origin_y: float,
    visible_height: float,
    content_height: float,
    margin: float = REVEAL_MARGIN,
) -> float:
    """Return the smallest scroll that brings the caret back into view."""
    target_min = caret_min_y - margin
    target_max = caret_max_y + margin
    max_origin = max(0.0, content_height - visible_height)
    if target_min < visible_origin_y:
        return max(target_min, 0.0)
    if target_max > visible_origin_y + visible_height:
        return min(target_max - visible_height, max_origin)
    return visible_origin_y


def typewriter_inset(visible_height: float, line_height: float) -> float:
    """Return the extra top/bottom inset that lets any line sit centered."""
    return max(0.0, (visible_height - line_height) / 2)
