"""Detect sentences long enough to lose the reader.

Objective: Count word tokens per sentence and warn once the count passes
the configured limit.

Example Rule Violations:
    - A single sentence of 45 words strung together with commas and "and".

Example Non-Violations:
    - "The quick brown fox jumps over the lazy dog today."

Severity: Warning; the only style check raised above info by default.
"""


from dataclasses import dataclass

from freewrite.style.analysis import (
    RuleResult,
    StyleCategory,
    StyleDocument,
    StyleIssue,
)

from freewrite.style.rules.base import Rule, RuleConfig


@dataclass
class LongSentenceRuleConfig(RuleConfig):
    """Config for long sentence detection."""

    max_words: int
    severity: str


class LongSentenceRule(Rule[LongSentenceRuleConfig]):
    """Flag sentences with more word tokens than the limit."""

    name = "long_sentence"
    category = StyleCategory.STYLE

    def example_violations(self) -> list[str]:
        """Return samples that should trigger long sentence warnings."""
        return [" ".join(["word"] * 45) + "."]

    def example_non_violations(self) -> list[str]:
        """Return samples that should avoid long sentence warnings."""
        return ["The quick brown fox jumps over the lazy dog today."]

    def forward(self, document: StyleDocument) -> RuleResult:
        """Compare each sentence's token count to the limit."""
        issues: list[StyleIssue] = [
            self.issue(sentence, "Long sentence; consider splitting")
            for sentence, tokens in document.sentence_tokens()
            if len(tokens) > self.config.max_words
        ]
        return RuleResult(issues=issues)
