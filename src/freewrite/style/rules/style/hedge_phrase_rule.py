"""Detect hedging phrases that soften a claim.

Objective: Find fixed hedges ("i think", "kind of", "maybe") anywhere in
the text, case-insensitively, and offer to delete them.

Example Rule Violations:
    - "I think the plan works."
    - "The demo was kind of slow."

Example Non-Violations:
    - "The plan works."

Severity: Low; each hit has a delete fix.
"""


from dataclasses import dataclass

from freewrite.style.analysis import (
    RuleResult,
    StyleCategory,
    StyleDocument,
    StyleFix,
    StyleIssue,
)

from freewrite.style.rules.base import Rule, RuleConfig
from freewrite.style.rules.helpers import HEDGE_PHRASES, find_phrase


@dataclass
class HedgePhraseRuleConfig(RuleConfig):
    """Config for hedge phrase detection."""

    severity: str


class HedgePhraseRule(Rule[HedgePhraseRuleConfig]):
    """Flag every occurrence of a hedging phrase."""

    name = "hedge_phrase"
    category = StyleCategory.STYLE

    def example_violations(self) -> list[str]:
        """Return samples that should trigger hedge matches."""
        return ["I think the plan works.", "The demo was kind of slow."]

    def example_non_violations(self) -> list[str]:
        """Return samples that should avoid hedge matches."""
        return ["The plan works."]

    def forward(self, document: StyleDocument) -> RuleResult:
        """Run a case-insensitive substring search per hedge."""
        issues: list[StyleIssue] = []
        for phrase in HEDGE_PHRASES:
            for span in find_phrase(document.text, phrase):
                issues.append(
                    self.issue(
                        span,
                        f'Hedging phrase "{phrase}"',
                        fix=StyleFix.delete(span),
                        ignored_key=phrase,
                    )
                )
        return RuleResult(issues=issues)
