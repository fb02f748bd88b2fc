"""Detect unbalanced straight quotes and parentheses.

Objective: Count delimiters across the whole text. An odd number of
straight double quotes flags the last quote; unequal ``(`` and ``)``
counts flag the last occurrence of whichever side is in excess.

Example Rule Violations:
    - 'She said "hello and left.'
    - "The fix (see below is pending."

Example Non-Violations:
    - 'She said "hello" and left (quietly).'

Severity: Low; flagged without a fix since the missing partner's position
is unknown.
"""


from dataclasses import dataclass

from freewrite.ranges import TextRange
from freewrite.style.analysis import (
    RuleResult,
    StyleCategory,
    StyleDocument,
    StyleIssue,
)

from freewrite.style.rules.base import Rule, RuleConfig


@dataclass
class UnmatchedDelimiterRuleConfig(RuleConfig):
    """Config for delimiter balance checks."""

    severity: str


class UnmatchedDelimiterRule(Rule[UnmatchedDelimiterRuleConfig]):
    """Flag the last quote or parenthesis of an unbalanced set."""

    name = "unmatched_delimiter"
    category = StyleCategory.PUNCTUATION

    def example_violations(self) -> list[str]:
        """Return samples that should trigger delimiter checks."""
        return ['She said "hello and left.', "The fix (see below is pending."]

    def example_non_violations(self) -> list[str]:
        """Return samples that should avoid delimiter checks."""
        return ['She said "hello" and left (quietly).']

    def forward(self, document: StyleDocument) -> RuleResult:
        """Count quotes and parentheses over the full text."""
        text = document.text
        issues: list[StyleIssue] = []

        if text.count('"') % 2:
            issues.append(
                self.issue(TextRange(text.rindex('"'), 1), "Unmatched quote")
            )

        opening = text.count("(")
        closing = text.count(")")
        if opening != closing:
            excess = "(" if opening > closing else ")"
            issues.append(
                self.issue(TextRange(text.rindex(excess), 1), "Unmatched parenthesis")
            )
        return RuleResult(issues=issues)
