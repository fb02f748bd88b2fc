"""Tests for the ordered highlight rule registry and matcher."""

from __future__ import annotations

from freewrite.markdown.patterns import (
    DEFAULT_HIGHLIGHT_RULES,
    HEADING_RULE,
    UNORDERED_LIST_RULE,
    RuleKind,
    fenced_blocks,
    heading_level,
    match_rule,
    match_rules,
)
from freewrite.ranges import TextRange


def _rule(name: str):
    return next(rule for rule in DEFAULT_HIGHLIGHT_RULES if rule.name == name)


def test_rule_order_starts_with_headings_and_ends_with_fences() -> None:
    """Headings apply first and fenced code last."""
    names = [rule.name for rule in DEFAULT_HIGHLIGHT_RULES]
    assert names[0] == "heading"
    assert names[-1] == "fenced_code"
    assert names.index("bold_italic") < names.index("bold") < names.index("italic_star")
    assert len(names) == len(set(names))


def test_heading_match_splits_token_and_content() -> None:
    """The hash run and its space form the token."""
    matches = match_rule(HEADING_RULE, "## Title")

    assert len(matches) == 1
    assert matches[0].token == TextRange(0, 3)
    assert matches[0].content == TextRange(3, 5)
    assert heading_level("## Title", matches[0].token) == 2


def test_heading_requires_space_after_hashes() -> None:
    """``#Title`` is a hashtag, not a heading."""
    assert match_rule(HEADING_RULE, "#Title") == []


def test_bold_match_has_leading_and_trailing_tokens() -> None:
    """Inline rules report delimiters around their content."""
    matches = match_rule(_rule("bold"), "a **b** c")

    assert len(matches) == 1
    assert matches[0].full == TextRange(2, 5)
    assert matches[0].token == TextRange(2, 2)
    assert matches[0].content == TextRange(4, 1)
    assert matches[0].trailing == TextRange(5, 2)


def test_single_star_italic_ignores_bold() -> None:
    """Double-star runs should not be read as italics."""
    assert match_rule(_rule("italic_star"), "a **b** c") == []
    assert match_rule(_rule("italic_star"), "an *em* word")[0].content == TextRange(4, 2)


def test_list_match_reports_indent_and_marker() -> None:
    """List lines expose the nesting whitespace separately from the marker."""
    text = "top\n  - nested"
    matches = match_rule(UNORDERED_LIST_RULE, text)

    assert len(matches) == 1
    assert matches[0].indent == TextRange(4, 2)
    assert matches[0].token == TextRange(6, 2)
    assert matches[0].content == TextRange(8, 6)


def test_divider_is_a_whole_line_token() -> None:
    """A divider line is one token."""
    rule = _rule("divider")
    assert rule.kind is RuleKind.TOKEN
    assert match_rule(rule, "above\n----\nbelow")[0].full == TextRange(6, 4)


def test_fenced_blocks_pair_fences() -> None:
    """A fence pair spans from the opening fence to the closing one."""
    blocks = fenced_blocks("```python\ncode\n```\n")

    assert len(blocks) == 1
    assert blocks[0].range == TextRange(0, 18)
    assert blocks[0].language == "python"
    assert blocks[0].closing == TextRange(15, 3)


def test_unpaired_fence_is_ignored() -> None:
    """A lone fence does not open a block."""
    assert fenced_blocks("```\ncode\n") == []
    assert fenced_blocks("```") == []


def test_match_rules_keeps_declaration_order() -> None:
    """Batch matching returns one entry per rule in order."""
    results = match_rules(DEFAULT_HIGHLIGHT_RULES, "# Hi **there**")
    assert [entry.rule for entry in results] == list(DEFAULT_HIGHLIGHT_RULES)
    assert results[0].matches
