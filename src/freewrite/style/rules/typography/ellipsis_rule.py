"""Suggest a single ellipsis character for runs of three or more periods."""


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

_PERIOD_RUN_RE = re.compile(r"\.{3,}")
ELLIPSIS = "…"


@dataclass
class EllipsisRuleConfig(RuleConfig):
    """Config for ellipsis suggestions."""

    severity: str


class EllipsisRule(Rule[EllipsisRuleConfig]):
    """Flag each run of three or more periods."""

    name = "ellipsis"
    category = StyleCategory.TYPOGRAPHY

    def example_violations(self) -> list[str]:
        """Return samples that should trigger ellipsis suggestions."""
        return ["And then...", "Wait....."]

    def example_non_violations(self) -> list[str]:
        """Return samples that should avoid ellipsis suggestions."""
        return [f"And then{ELLIPSIS}", "Done.."]

    def forward(self, document: StyleDocument) -> RuleResult:
        """Emit a replacement for every period run."""
        issues: list[StyleIssue] = []
        for match in _PERIOD_RUN_RE.finditer(document.text):
            span = TextRange.from_bounds(match.start(), match.end())
            issues.append(
                self.issue(
                    span, "Use a single ellipsis", fix=StyleFix.replace(span, ELLIPSIS)
                )
            )
        return RuleResult(issues=issues)
