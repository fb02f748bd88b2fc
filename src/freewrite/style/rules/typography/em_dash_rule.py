"""Suggest a real em dash in place of a double hyphen.

Objective: Replace every ``--`` with ``—``.

Example Rule Violations:
    - "wait--really"

Example Non-Violations:
    - "wait—really"
    - "a well-known fact"

Severity: Low; typographic polish.
"""


import re
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

_DOUBLE_HYPHEN_RE = re.compile(r"--")
EM_DASH = "—"


@dataclass
class EmDashRuleConfig(RuleConfig):
    """Config for em dash suggestions."""

    severity: str


class EmDashRule(Rule[EmDashRuleConfig]):
    """Flag each double hyphen."""

    name = "em_dash"
    category = StyleCategory.TYPOGRAPHY

    def example_violations(self) -> list[str]:
        """Return samples that should trigger em dash suggestions."""
        return ["wait--really"]

    def example_non_violations(self) -> list[str]:
        """Return samples that should avoid em dash suggestions."""
        return [f"wait{EM_DASH}really", "a well-known fact"]

    def forward(self, document: StyleDocument) -> RuleResult:
        """Emit a replacement for every non-overlapping ``--``."""
        issues: list[StyleIssue] = []
        for match in _DOUBLE_HYPHEN_RE.finditer(document.text):
            span = TextRange.from_bounds(match.start(), match.end())
            issues.append(
                self.issue(span, "Use an em dash", fix=StyleFix.replace(span, EM_DASH))
            )
        return RuleResult(issues=issues)
