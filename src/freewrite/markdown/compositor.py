"""Compose highlight rule matches into one attribute map per character.

A pass always starts from a full-buffer base (or, in typewriter mode, a
full-buffer fade with the focus range unfaded), optionally marks the
current line, then overlays each rule in declaration order.
"""


import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass

from freewrite.config import (
    MAX_HIGHLIGHT_LENGTH,
    FontSpec,
    HighlightScope,
    ParagraphStyle,
    StyleConfig,
)
from freewrite.linguistics import LinguisticService, SpacyService
from freewrite.ranges import TextRange, clamp_location

from .attributes import AttributeKey, AttributeSpan, Attributes, AttributeValue, StyledText
from .focus import FocusRanges, focus_ranges
from .patterns import (
    DEFAULT_HIGHLIGHT_RULES,
    HighlightRule,
    RuleKind,
    RuleMatch,
    SpanStyle,
    fenced_blocks,
    heading_level,
    match_rule,
)

logger = logging.getLogger(__name__)

TextMeasure = Callable[[str, FontSpec], float]

HEADING_SCALES: tuple[float, ...] = (1.6, 1.4, 1.25, 1.15, 1.1, 1.05)
_SPACE_EM = 0.28
_TAB_SPACES = 4


def estimate_text_width(text: str, font: FontSpec) -> float:
    """Approximate the advance of a whitespace run when no host metrics exist."""
    columns = sum(_TAB_SPACES if char == "\t" else 1 for char in text)
    return columns * font.size * _SPACE_EM


@dataclass(frozen=True)
class ScrollRequest:
    """Ask the host to keep the caret line vertically centered."""

    caret_offset: int
    line: TextRange


@dataclass(frozen=True)
class HighlightResult:
    """Output of one highlight pass."""

    spans: tuple[AttributeSpan, ...]
    focus: FocusRanges
    typing_attributes: Mapping[AttributeKey, AttributeValue]
    scroll_request: ScrollRequest | None = None
    size_gated: bool = False

    def to_payload(self) -> dict[str, object]:
        """Serialize spans and focus ranges for JSON output."""

        def _range(value: TextRange | None) -> dict[str, int] | None:
            return value.to_payload() if value is not None else None

        return {
            "spans": [span.to_payload() for span in self.spans],
            "active_range": _range(self.focus.token_active),
            "highlight_range": _range(self.focus.highlight),
            "mark_line_range": _range(self.focus.mark_line),
            "scroll_request": (
                {
                    "caret_offset": self.scroll_request.caret_offset,
                    "line": self.scroll_request.line.to_payload(),
                }
                if self.scroll_request is not None
                else None
            ),
            "size_gated": self.size_gated,
        }


def base_attributes(config: StyleConfig) -> dict[AttributeKey, AttributeValue]:
    """Return the whole-buffer default attributes."""
    return {
        AttributeKey.FONT: config.base_font,
        AttributeKey.FOREGROUND: config.text_color,
        AttributeKey.PARAGRAPH_STYLE: config.paragraph_style,
    }


def span_attributes(style: SpanStyle, config: StyleConfig) -> dict[AttributeKey, AttributeValue]:
    """Resolve a named span style into concrete attributes."""
    base_font = config.base_font
    if style is SpanStyle.BOLD:
        return {AttributeKey.FONT: base_font.with_traits(bold=True)}
    if style is SpanStyle.ITALIC:
        return {AttributeKey.FONT: base_font.with_traits(italic=True)}
    if style is SpanStyle.BOLD_ITALIC:
        return {AttributeKey.FONT: base_font.with_traits(bold=True, italic=True)}
    if style is SpanStyle.MARK:
        return {AttributeKey.BACKGROUND: config.mark_background}
    if style is SpanStyle.DELETION:
        return {
            AttributeKey.FOREGROUND: config.deletion_color,
            AttributeKey.STRIKETHROUGH: True,
        }
    if style is SpanStyle.COMMENT:
        return {
            AttributeKey.FOREGROUND: config.muted_text_color,
            AttributeKey.BACKGROUND: config.comment_background,
            AttributeKey.FONT: base_font.with_traits(italic=True),
        }
    if style is SpanStyle.ANNOTATION:
        return {AttributeKey.BACKGROUND: config.annotation_background}
    if style is SpanStyle.LINK:
        return {
            AttributeKey.FOREGROUND: config.link_color,
            AttributeKey.UNDERLINE: True,
        }
    if style is SpanStyle.CODE:
        return {
            AttributeKey.FONT: config.code_font,
            AttributeKey.FOREGROUND: config.code_color,
            AttributeKey.BACKGROUND: config.code_background,
        }
    if style is SpanStyle.QUOTE:
        return {
            AttributeKey.FOREGROUND: config.quote_color,
            AttributeKey.FONT: base_font.with_traits(italic=True),
        }
    if style is SpanStyle.REFERENCE:
        return {
            AttributeKey.FOREGROUND: config.link_color,
            AttributeKey.FONT: base_font.with_traits(bold=True),
        }
    return {}


def token_attributes(
    config: StyleConfig,
    active_range: TextRange | None,
    token: TextRange,
    hide_when_inactive: bool = True,
) -> dict[AttributeKey, AttributeValue]:
    """Pick exactly one of the visible or hidden token renderings."""
    visible = (
        not hide_when_inactive
        or active_range is None
        or active_range.intersects(token)
    )
    if visible:
        return {
            AttributeKey.FOREGROUND: config.token_color,
            AttributeKey.FONT: config.base_font,
        }
    return {
        AttributeKey.FOREGROUND: config.hidden_token_color,
        AttributeKey.FONT: config.hidden_token_font,
    }


class Highlighter:
    """Run the ordered highlight rules over a buffer snapshot."""

    def __init__(
        self,
        rules: tuple[HighlightRule, ...] = DEFAULT_HIGHLIGHT_RULES,
        segmenter: LinguisticService | None = None,
        measure: TextMeasure = estimate_text_width,
    ) -> None:
        """Initialize with a rule order, sentence segmenter and text metrics.

        Without a segmenter, a rule-based spaCy sentence splitter is built
        here so that no pass ever loads a model.
        """
        self.rules = tuple(rules)
        self.segmenter = segmenter if segmenter is not None else SpacyService.blank()
        self.measure = measure

    def highlight(
        self,
        text: str,
        selection: TextRange | None,
        config: StyleConfig,
    ) -> HighlightResult:
        """Compute the attribute spans for one pass."""
        styled = StyledText(text)
        typing = base_attributes(config)

        if len(text) > MAX_HIGHLIGHT_LENGTH:
            logger.debug(
                "Buffer length %d exceeds %d; applying base attributes only",
                len(text),
                MAX_HIGHLIGHT_LENGTH,
            )
            styled.set_attributes(typing, TextRange(0, len(text)))
            return HighlightResult(
                spans=styled.spans(),
                focus=FocusRanges(None, None, None),
                typing_attributes=typing,
                size_gated=True,
            )

        needs_sentences = (
            config.typewriter_enabled
            and config.highlight_scope is HighlightScope.SENTENCE
        )
        focus = focus_ranges(
            text,
            selection,
            config,
            self.segmenter if needs_sentences and text else None,
        )
        self.apply(styled, config, focus)

        scroll_request = None
        if (
            config.typewriter_enabled
            and config.fixed_scroll
            and selection is not None
            and focus.token_active is not None
        ):
            scroll_request = ScrollRequest(
                caret_offset=clamp_location(text, selection.offset),
                line=focus.token_active,
            )
        return HighlightResult(
            spans=styled.spans(),
            focus=focus,
            typing_attributes=typing,
            scroll_request=scroll_request,
        )

    def apply(self, styled: StyledText, config: StyleConfig, focus: FocusRanges) -> None:
        """Paint the base state and every rule onto ``styled`` in order."""
        text = styled.text
        full = TextRange(0, len(text))
        if config.typewriter_enabled and focus.highlight is not None:
            faded = base_attributes(config)
            faded[AttributeKey.FOREGROUND] = config.faded_text_color
            styled.set_attributes(faded, full)
            styled.add_attributes(base_attributes(config), focus.highlight)
        else:
            styled.set_attributes(base_attributes(config), full)

        if config.typewriter_enabled and focus.mark_line is not None:
            styled.add_attributes(
                {AttributeKey.BACKGROUND: config.current_line_background},
                focus.mark_line,
            )

        fences = [block.range for block in fenced_blocks(text)]
        active = focus.token_active
        for rule in self.rules:
            for match in match_rule(rule, text):
                if rule.kind is not RuleKind.FENCED and any(
                    match.full.intersects(fence) for fence in fences
                ):
                    continue
                self._apply_match(styled, config, active, rule, match)

    def _apply_match(
        self,
        styled: StyledText,
        config: StyleConfig,
        active: TextRange | None,
        rule: HighlightRule,
        match: RuleMatch,
    ) -> None:
        if rule.kind is RuleKind.HEADING:
            self._apply_heading(styled, config, active, rule, match)
        elif rule.kind is RuleKind.LIST:
            self._apply_list(styled, config, active, rule, match)
        elif rule.kind is RuleKind.LINE:
            styled.add_attributes(span_attributes(rule.style, config), match.full)
            if match.token is not None:
                styled.add_attributes(
                    token_attributes(config, active, match.token, rule.hide_when_inactive),
                    match.token,
                )
            if rule.indent > 0:
                paragraph = ParagraphStyle(
                    line_spacing=config.line_spacing,
                    first_line_head_indent=rule.indent,
                    head_indent=rule.indent,
                )
                styled.add_attributes({AttributeKey.PARAGRAPH_STYLE: paragraph}, match.full)
        elif rule.kind is RuleKind.TOKEN:
            styled.add_attributes(
                token_attributes(config, active, match.full, rule.hide_when_inactive),
                match.full,
            )
        elif rule.kind is RuleKind.FENCED:
            block: Attributes = {
                **span_attributes(SpanStyle.CODE, config),
                AttributeKey.PARAGRAPH_STYLE: config.paragraph_style,
            }
            styled.add_attributes(block, match.full)
            for fence in (match.token, match.trailing):
                if fence is not None:
                    styled.add_attributes(
                        token_attributes(config, active, fence, rule.hide_when_inactive),
                        fence,
                    )
        else:
            if match.content is not None:
                styled.add_attributes(span_attributes(rule.style, config), match.content)
            for token in (match.token, match.trailing):
                if token is not None:
                    styled.add_attributes(
                        token_attributes(config, active, token, rule.hide_when_inactive),
                        token,
                    )

    def _apply_heading(
        self,
        styled: StyledText,
        config: StyleConfig,
        active: TextRange | None,
        rule: HighlightRule,
        match: RuleMatch,
    ) -> None:
        if match.token is None or match.content is None:
            return
        level = heading_level(styled.text, match.token, rule.max_level)
        scale = HEADING_SCALES[min(level, len(HEADING_SCALES)) - 1]
        styled.add_attributes(
            {
                AttributeKey.FONT: config.base_font.scaled(scale).with_traits(bold=True),
                AttributeKey.FOREGROUND: config.text_color,
            },
            match.content,
        )
        styled.add_attributes(
            token_attributes(config, active, match.token, rule.hide_when_inactive),
            match.token,
        )

    def _apply_list(
        self,
        styled: StyledText,
        config: StyleConfig,
        active: TextRange | None,
        rule: HighlightRule,
        match: RuleMatch,
    ) -> None:
        whitespace = match.indent.slice(styled.text) if match.indent else ""
        nested = self.measure(whitespace, config.base_font) if whitespace else 0.0
        paragraph = ParagraphStyle(
            line_spacing=config.line_spacing,
            first_line_head_indent=rule.indent,
            head_indent=rule.indent + nested,
        )
        styled.add_attributes({AttributeKey.PARAGRAPH_STYLE: paragraph}, match.full)
        if match.token is None or match.token.length == 0:
            return
        content = match.content.slice(styled.text) if match.content else ""
        if not content.strip(" \t"):
            marker: Attributes = {
                AttributeKey.FOREGROUND: config.text_color,
                AttributeKey.FONT: config.base_font,
            }
        else:
            marker = token_attributes(config, active, match.token, rule.hide_when_inactive)
        styled.add_attributes(marker, match.token)
