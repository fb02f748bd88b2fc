"""Incremental markdown highlighter and list-continuation engine."""

from .attributes import AttributeKey, AttributeSpan, StyledText
from .compositor import Highlighter, HighlightResult, ScrollRequest
from .focus import FocusRanges, focus_ranges
from .lists import (
    INDENT_UNIT,
    EditBatch,
    EditIntent,
    ListContext,
    ListKind,
    apply_edits,
    classify_line,
    continue_list,
    indent_lines,
)
from .patterns import DEFAULT_HIGHLIGHT_RULES, HighlightRule, RuleKind, match_rule
from .session import EditorSession, SessionState, SessionStateError

__all__ = [
    "AttributeKey",
    "AttributeSpan",
    "DEFAULT_HIGHLIGHT_RULES",
    "EditBatch",
    "EditIntent",
    "EditorSession",
    "FocusRanges",
    "HighlightResult",
    "HighlightRule",
    "Highlighter",
    "INDENT_UNIT",
    "ListContext",
    "ListKind",
    "RuleKind",
    "ScrollRequest",
    "SessionState",
    "SessionStateError",
    "StyledText",
    "apply_edits",
    "classify_line",
    "continue_list",
    "focus_ranges",
    "indent_lines",
    "match_rule",
]
