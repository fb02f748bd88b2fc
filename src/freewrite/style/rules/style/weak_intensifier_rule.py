"""Detect weak intensifiers such as "very" and "really".

Objective: Flag each intensifier that props up a word instead of choosing
a stronger one, offering to delete it.

Example Rule Violations:
    - "The results were very good."
    - "It is really quite simple."

Example Non-Violations:
    - "The results were excellent."

Severity: Low; one issue per intensifier.
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
from freewrite.style.rules.helpers import WEAK_INTENSIFIERS


@dataclass
class WeakIntensifierRuleConfig(RuleConfig):
    """Config for weak intensifier detection."""

    severity: str


class WeakIntensifierRule(Rule[WeakIntensifierRuleConfig]):
    """Flag intensifier lemmas individually."""

    name = "weak_intensifier"
    category = StyleCategory.STYLE

    def example_violations(self) -> list[str]:
        """Return samples that should trigger intensifier matches."""
        return ["The results were very good.", "It is really quite simple."]

    def example_non_violations(self) -> list[str]:
        """Return samples that should avoid intensifier matches."""
        return ["The results were excellent."]

    def forward(self, document: StyleDocument) -> RuleResult:
        """Emit a delete fix for every intensifier token."""
        issues = [
            self.issue(
                token.range,
                f'Weak intensifier "{token.text}"',
                fix=StyleFix.delete(token.range),
                ignored_key=token.lemma,
            )
            for token in document.tokens
            if token.lemma in WEAK_INTENSIFIERS
        ]
        return RuleResult(issues=issues)
