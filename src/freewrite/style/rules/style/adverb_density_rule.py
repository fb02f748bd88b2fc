"""Detect sentences leaning on adverbs instead of strong verbs.

Objective: Count adverb-tagged tokens per sentence and flag sentences that
either pile up several adverbs or have a high adverb share.

Example Rule Violations:
    - "She quickly and quietly and nervously and happily left."
      Four adverbs in one sentence.
    - "Honestly, seriously."
      Every word is an adverb.

Example Non-Violations:
    - "She left the room after the meeting ended."
      No adverbs at all.

Severity: Low; the whole sentence is flagged without a fix.
"""


from dataclasses import dataclass

from freewrite.style.analysis import (
    RuleResult,
    StyleCategory,
    StyleDocument,
    StyleIssue,
)

from freewrite.style.rules.base import Rule, RuleConfig
from freewrite.style.rules.helpers import ADVERB_TAG


@dataclass
class AdverbDensityRuleConfig(RuleConfig):
    """Config for per-sentence adverb density."""

    max_adverbs: int
    max_ratio: float
    severity: str


class AdverbDensityRule(Rule[AdverbDensityRuleConfig]):
    """Flag sentences with too many adverbs."""

    name = "adverb_density"
    category = StyleCategory.STYLE

    def example_violations(self) -> list[str]:
        """Return samples that should trigger adverb density."""
        return [
            "She quickly and quietly and nervously and happily left.",
            "Honestly, seriously.",
        ]

    def example_non_violations(self) -> list[str]:
        """Return samples that should avoid adverb density."""
        return ["She left the room after the meeting ended."]

    def forward(self, document: StyleDocument) -> RuleResult:
        """Compare each sentence's adverb count and ratio to the limits."""
        issues: list[StyleIssue] = []
        for sentence, tokens in document.sentence_tokens():
            adverbs = sum(1 for token in tokens if token.part_of_speech == ADVERB_TAG)
            ratio = adverbs / max(1, len(tokens))
            if adverbs >= self.config.max_adverbs or ratio > self.config.max_ratio:
                issues.append(
                    self.issue(sentence, "Adverb heavy sentence; tighten the verb")
                )
        return RuleResult(issues=issues)
