"""Detect spacing, repeated-mark and capitalization slips.

Objective: Run a fixed set of regex sweeps over the raw text and attach a
replacement fix to every match:

    - two or more spaces collapse to one;
    - whitespace before ``, . ; : ! ?`` is removed;
    - a run of ``!``/``?`` collapses to a single mark;
    - a lowercase letter after sentence-ending punctuation is capitalized.

Example Rule Violations:
    - "Hello  world"
      Double space at offset 5.
    - "Really?! no way."
      Repeated marks, then a lowercase sentence start.

Example Non-Violations:
    - "Hello world. Next sentence, please!"

Severity: Low; every match carries its fix.
"""


import re
from collections.abc import Callable
from dataclasses import dataclass

from freewrite.ranges import TextRange
from freewrite.style.analysis import (
    RuleResult,
    StyleCategory,
    StyleDocument,
    StyleFix,
    StyleIssue,
)

from freewrite.style.rules.base import Rule, RuleConfig

Replacement = Callable[[re.Match[str]], str]


def _capitalize_after_stop(match: re.Match[str]) -> str:
    """Rebuild the punctuation prefix followed by the capitalized letter."""
    return match.group(1) + match.group(2).upper()


_SWEEPS: tuple[tuple[str, re.Pattern[str], Replacement], ...] = (
    ("Multiple spaces", re.compile(r" {2,}"), lambda _: " "),
    (
        "Space before punctuation",
        re.compile(r"\s+([,.;:!?])"),
        lambda match: match.group(1),
    ),
    (
        "Multiple exclamation/question marks",
        re.compile(r"([!?]){2,}"),
        lambda match: match.group(1),
    ),
    (
        "Lowercase after sentence end",
        re.compile(r"([.!?]\s+)([a-z])"),
        _capitalize_after_stop,
    ),
)


@dataclass
class PunctuationSpacingRuleConfig(RuleConfig):
    """Config for punctuation regex sweeps."""

    severity: str


class PunctuationSpacingRule(Rule[PunctuationSpacingRuleConfig]):
    """Flag each sweep match with a rebuilt replacement."""

    name = "punctuation_spacing"
    category = StyleCategory.PUNCTUATION

    def example_violations(self) -> list[str]:
        """Return samples that should trigger punctuation sweeps."""
        return ["Hello  world", "Really?! no way.", "Wait , what"]

    def example_non_violations(self) -> list[str]:
        """Return samples that should avoid punctuation sweeps."""
        return ["Hello world. Next sentence, please!"]

    def forward(self, document: StyleDocument) -> RuleResult:
        """Apply every sweep over the full text."""
        issues: list[StyleIssue] = []
        for message, pattern, replacement in _SWEEPS:
            for match in pattern.finditer(document.text):
                span = TextRange.from_bounds(match.start(), match.end())
                issues.append(
                    self.issue(
                        span,
                        message,
                        fix=StyleFix.replace(span, replacement(match)),
                    )
                )
        return RuleResult(issues=issues)
