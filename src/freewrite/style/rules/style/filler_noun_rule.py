"""Detect filler nouns like "thing" and "stuff"."""


from dataclasses import dataclass

from freewrite.style.analysis import (
    RuleResult,
    StyleCategory,
    StyleDocument,
    StyleIssue,
)

from freewrite.style.rules.base import Rule, RuleConfig
from freewrite.style.rules.helpers import FILLER_NOUNS


@dataclass
class FillerNounRuleConfig(RuleConfig):
    """Config for individual filler noun flags."""

    severity: str


class FillerNounRule(Rule[FillerNounRuleConfig]):
    """Flag each filler noun token."""

    name = "filler_noun"
    category = StyleCategory.STYLE

    def example_violations(self) -> list[str]:
        """Return samples that should trigger filler noun matches."""
        return ["The thing about deadlines is stress.", "Bring your stuff."]

    def example_non_violations(self) -> list[str]:
        """Return samples that should avoid filler noun matches."""
        return ["Deadlines cause stress."]

    def forward(self, document: StyleDocument) -> RuleResult:
        """Emit a flag-only issue for every filler noun."""
        issues = [
            self.issue(
                token.range,
                f'Be specific instead of "{token.text}"',
                ignored_key=token.lemma,
            )
            for token in document.tokens
            if token.lemma in FILLER_NOUNS
        ]
        return RuleResult(issues=issues)
