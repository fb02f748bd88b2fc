"""Detect text that keeps reaching for filler nouns.

Objective: Count "thing"/"stuff" tokens across the whole text and, once the
count reaches the threshold, flag the first occurrence as a summary issue.

Example Rule Violations:
    - "One thing led to another thing, and then stuff happened."

Example Non-Violations:
    - "One thing led to another."

Severity: Low; a single summary issue per text.
"""


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
class VagueNounFrequencyRuleConfig(RuleConfig):
    """Config for buffer-wide filler noun frequency."""

    min_count: int
    severity: str


class VagueNounFrequencyRule(Rule[VagueNounFrequencyRuleConfig]):
    """Flag the first filler noun once they become frequent."""

    name = "vague_noun_frequency"
    category = StyleCategory.SEMANTICS

    def example_violations(self) -> list[str]:
        """Return samples that should trigger filler noun frequency."""
        return ["One thing led to another thing, and then stuff happened."]

    def example_non_violations(self) -> list[str]:
        """Return samples that should avoid filler noun frequency."""
        return ["One thing led to another."]

    def forward(self, document: StyleDocument) -> RuleResult:
        """Count filler tokens and flag the first when frequent."""
        fillers = [token for token in document.tokens if token.lemma in FILLER_NOUNS]
        if len(fillers) < self.config.min_count:
            return RuleResult()
        return RuleResult(
            issues=[
                self.issue(
                    fillers[0].range,
                    "Frequent vague nouns; add specifics",
                    ignored_key="filler",
                )
            ]
        )
