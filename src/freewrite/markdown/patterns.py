"""Ordered registry of lexical highlight rules and their matcher.

Every rule runs over the whole buffer on every pass. Rules are applied in
declaration order and later rules overwrite attributes of earlier ones on
overlapping ranges, so the order of :data:`DEFAULT_HIGHLIGHT_RULES` is part
of the behavior:

1. headings
2. list lines (unordered, ordered, checklist)
3. inline emphasis, three- and two-character delimiters before
   single-character ones
4. inline decorations (mark, delete, comment, annotation, link, code, raw)
5. line rules (block comment, quote, code block, raw block)
6. literal markers (footnote, image) and the divider
7. fenced code blocks, always last

Patterns use named groups: ``token`` is the leading decorative token,
``content`` the styled text, ``indent`` the leading whitespace of a list
line.
"""


import re
from dataclasses import dataclass, field
from enum import StrEnum

from freewrite.ranges import TextRange


class RuleKind(StrEnum):
    """Tagged variants of highlight rules."""

    HEADING = "heading"
    LIST = "list"
    INLINE = "inline"
    LINE = "line"
    TOKEN = "token"
    FENCED = "fenced"


class SpanStyle(StrEnum):
    """Named attribute recipes resolved against the style configuration."""

    PLAIN = "plain"
    BOLD = "bold"
    ITALIC = "italic"
    BOLD_ITALIC = "bold_italic"
    MARK = "mark"
    DELETION = "deletion"
    COMMENT = "comment"
    ANNOTATION = "annotation"
    LINK = "link"
    CODE = "code"
    QUOTE = "quote"
    REFERENCE = "reference"


@dataclass(frozen=True)
class HighlightRule:
    """One lexical rule: a compiled pattern plus how to paint its matches."""

    name: str
    kind: RuleKind
    pattern: re.Pattern[str]
    style: SpanStyle = SpanStyle.PLAIN
    hide_when_inactive: bool = True
    indent: float = 0.0
    max_level: int = 6


@dataclass(frozen=True)
class RuleMatch:
    """Sub-ranges of one rule match."""

    full: TextRange
    token: TextRange | None = None
    content: TextRange | None = None
    trailing: TextRange | None = None
    indent: TextRange | None = None


@dataclass(frozen=True)
class FencedBlock:
    """A fenced code block from its opening fence line to its closing one."""

    range: TextRange
    opening: TextRange
    closing: TextRange
    language: str = ""


@dataclass(frozen=True)
class RuleMatches:
    """All matches of one rule in one pass."""

    rule: HighlightRule
    matches: tuple[RuleMatch, ...] = field(default_factory=tuple)


def _group(match: re.Match[str], name: str) -> TextRange | None:
    if name not in match.re.groupindex or match.start(name) < 0:
        return None
    return TextRange.from_bounds(match.start(name), match.end(name))


def _compile(pattern: str, *, lines: bool = False) -> re.Pattern[str]:
    return re.compile(pattern, re.MULTILINE if lines else 0)


FENCE_RE = _compile(r"^```[ \t]*(?P<language>[A-Za-z0-9+\-]*)[ \t]*$", lines=True)

HEADING_RULE = HighlightRule(
    "heading",
    RuleKind.HEADING,
    _compile(r"^(?P<token>#{1,6}[ \t]+)(?P<content>.+)$", lines=True),
)
UNORDERED_LIST_RULE = HighlightRule(
    "unordered_list",
    RuleKind.LIST,
    _compile(r"^(?P<indent>[ \t]*)(?P<token>[-*+][ \t]+)(?P<content>.*)$", lines=True),
    hide_when_inactive=False,
    indent=16.0,
)
ORDERED_LIST_RULE = HighlightRule(
    "ordered_list",
    RuleKind.LIST,
    _compile(r"^(?P<indent>[ \t]*)(?P<token>\d+[.)][ \t]+)(?P<content>.*)$", lines=True),
    hide_when_inactive=False,
    indent=20.0,
)
CHECKLIST_RULE = HighlightRule(
    "checklist",
    RuleKind.LIST,
    _compile(
        r"^(?P<indent>[ \t]*)(?P<token>[-*+][ \t]+\[(?: |x|X)\][ \t]+)(?P<content>.*)$",
        lines=True,
    ),
    hide_when_inactive=False,
    indent=24.0,
)
FENCED_CODE_RULE = HighlightRule("fenced_code", RuleKind.FENCED, FENCE_RE, SpanStyle.CODE)

DEFAULT_HIGHLIGHT_RULES: tuple[HighlightRule, ...] = (
    HEADING_RULE,
    UNORDERED_LIST_RULE,
    ORDERED_LIST_RULE,
    CHECKLIST_RULE,
    HighlightRule(
        "bold_italic",
        RuleKind.INLINE,
        _compile(r"(?P<delimiter>\*\*\*|___)(?P<content>[^\n]+?)(?P=delimiter)"),
        SpanStyle.BOLD_ITALIC,
    ),
    HighlightRule("bold", RuleKind.INLINE, _compile(r"\*\*(?P<content>[^\n]+?)\*\*"), SpanStyle.BOLD),
    HighlightRule(
        "bold_underscore",
        RuleKind.INLINE,
        _compile(r"__(?!_)(?P<content>[^\n]+?)(?<!_)__"),
        SpanStyle.BOLD,
    ),
    HighlightRule(
        "italic_underscore",
        RuleKind.INLINE,
        _compile(r"(?<!\w)_(?P<content>[^\n]+?)_(?!\w)"),
        SpanStyle.ITALIC,
    ),
    HighlightRule(
        "italic_star",
        RuleKind.INLINE,
        _compile(r"(?<!\*)\*(?P<content>[^\n*]+?)\*(?!\*)"),
        SpanStyle.ITALIC,
    ),
    HighlightRule("mark", RuleKind.INLINE, _compile(r"::(?P<content>[^\n]+?)::"), SpanStyle.MARK),
    HighlightRule("delete", RuleKind.INLINE, _compile(r"\|\|(?P<content>[^\n]+?)\|\|"), SpanStyle.DELETION),
    HighlightRule("strikethrough", RuleKind.INLINE, _compile(r"~~(?P<content>[^\n]+?)~~"), SpanStyle.DELETION),
    HighlightRule("inline_comment", RuleKind.INLINE, _compile(r"\+\+(?P<content>[^\n]+?)\+\+"), SpanStyle.COMMENT),
    HighlightRule("annotation", RuleKind.INLINE, _compile(r"\{(?P<content>[^\n]+?)\}"), SpanStyle.ANNOTATION),
    HighlightRule("link", RuleKind.INLINE, _compile(r"\[(?P<content>[^\n\]]+?)\]"), SpanStyle.LINK),
    HighlightRule(
        "inline_code",
        RuleKind.INLINE,
        _compile(r"(?<!\w)'(?P<content>[^\n']+?)'(?!\w)"),
        SpanStyle.CODE,
    ),
    HighlightRule("backtick_code", RuleKind.INLINE, _compile(r"`(?P<content>[^\n`]+?)`"), SpanStyle.CODE),
    HighlightRule(
        "raw_inline",
        RuleKind.INLINE,
        _compile(r"(?<!~)~(?P<content>[^\n~]+?)~(?!~)"),
        SpanStyle.CODE,
    ),
    HighlightRule(
        "block_comment",
        RuleKind.LINE,
        _compile(r"^(?P<token>%%[ \t]*)(?P<content>.*)$", lines=True),
        SpanStyle.COMMENT,
    ),
    HighlightRule(
        "quote",
        RuleKind.LINE,
        _compile(r"^(?P<token>>[ \t]+)(?P<content>.*)$", lines=True),
        SpanStyle.QUOTE,
        indent=18.0,
    ),
    HighlightRule(
        "code_block",
        RuleKind.LINE,
        _compile(r"^(?P<token>''[ \t]*)(?P<content>.*)$", lines=True),
        SpanStyle.CODE,
    ),
    HighlightRule(
        "raw_block",
        RuleKind.LINE,
        _compile(r"^(?P<token>~~[ \t]*)(?P<content>.*)$", lines=True),
        SpanStyle.CODE,
    ),
    HighlightRule("footnote", RuleKind.INLINE, _compile(r"\((?P<content>fn)\)"), SpanStyle.REFERENCE),
    HighlightRule("image", RuleKind.INLINE, _compile(r"\((?P<content>img)\)"), SpanStyle.REFERENCE),
    HighlightRule(
        "divider",
        RuleKind.TOKEN,
        _compile(r"^----[ \t]*$", lines=True),
        hide_when_inactive=False,
    ),
    FENCED_CODE_RULE,
)


def match_rule(rule: HighlightRule, text: str) -> list[RuleMatch]:
    """Return every match of ``rule`` over ``text`` as token/content ranges.

    Degenerate matches (an empty whole match, or an empty heading or line
    token) are skipped rather than reported.
    """
    if rule.kind is RuleKind.FENCED:
        return [
            RuleMatch(full=block.range, token=block.opening, trailing=block.closing)
            for block in fenced_blocks(text)
        ]

    matches: list[RuleMatch] = []
    for match in rule.pattern.finditer(text):
        full = TextRange.from_bounds(match.start(), match.end())
        if full.length == 0:
            continue
        token = _group(match, "token")
        content = _group(match, "content")

        if rule.kind is RuleKind.TOKEN:
            matches.append(RuleMatch(full=full, token=full))
        elif rule.kind in (RuleKind.HEADING, RuleKind.LINE):
            if token is None or token.length == 0:
                continue
            matches.append(RuleMatch(full=full, token=token, content=content))
        elif rule.kind is RuleKind.LIST:
            matches.append(
                RuleMatch(
                    full=full,
                    token=token,
                    content=content,
                    indent=_group(match, "indent"),
                )
            )
        else:
            if content is None:
                continue
            leading = TextRange.from_bounds(full.offset, content.offset)
            trailing = TextRange.from_bounds(content.end, full.end)
            matches.append(
                RuleMatch(
                    full=full,
                    token=leading if leading.length else None,
                    content=content,
                    trailing=trailing if trailing.length else None,
                )
            )
    return matches


def match_rules(
    rules: tuple[HighlightRule, ...], text: str
) -> list[RuleMatches]:
    """Run every rule over ``text`` and keep declaration order."""
    return [RuleMatches(rule=rule, matches=tuple(match_rule(rule, text))) for rule in rules]


def fenced_blocks(text: str) -> list[FencedBlock]:
    """Pair fence lines into blocks; an unpaired trailing fence is ignored."""
    blocks: list[FencedBlock] = []
    position = 0
    while position < len(text):
        opening = FENCE_RE.search(text, position)
        if opening is None or opening.end() >= len(text):
            break
        closing = FENCE_RE.search(text, opening.end())
        if closing is None:
            break
        blocks.append(
            FencedBlock(
                range=TextRange.from_bounds(opening.start(), closing.end()),
                opening=TextRange.from_bounds(opening.start(), opening.end()),
                closing=TextRange.from_bounds(closing.start(), closing.end()),
                language=opening.group("language"),
            )
        )
        position = closing.end()
    return blocks


def heading_level(text: str, token: TextRange, max_level: int = 6) -> int:
    """Return the heading level from the hash run, clamped to ``[1, max_level]``."""
    hashes = token.slice(text).count("#")
    return min(max(hashes, 1), max_level)
