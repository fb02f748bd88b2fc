"""Detect a sentence that restates the one before it.

Objective: Compare adjacent sentences by their sets of content lemmas and
flag the second when the overlap is both proportionally high and large in
absolute terms.

Example Rule Violations:
    - "Our team shipped the billing release early. The team shipped the
      billing release early today."
      Five shared content lemmas out of six.

Example Non-Violations:
    - "Our team shipped the billing release. Customers noticed faster invoices."
      The sentences share nothing beyond stopwords.

Severity: Low; flagged without a fix since only the writer can pick which
sentence to keep.
"""


from dataclasses import dataclass

from freewrite.style.analysis import (
    RuleResult,
    StyleCategory,
    StyleDocument,
    StyleIssue,
)

from freewrite.style.rules.base import Rule, RuleConfig
from freewrite.style.rules.helpers import content_lemmas


@dataclass
class EchoSentenceRuleConfig(RuleConfig):
    """Config for adjacent-sentence echo detection."""

    min_similarity: float
    min_shared: int
    severity: str


class EchoSentenceRule(Rule[EchoSentenceRuleConfig]):
    """Flag adjacent sentences with heavy lemma overlap."""

    name = "echo_sentence"
    category = StyleCategory.REDUNDANCY

    def example_violations(self) -> list[str]:
        """Return samples that should trigger echo detection."""
        return [
            "Our team shipped the billing release early. "
            "The team shipped the billing release early today."
        ]

    def example_non_violations(self) -> list[str]:
        """Return samples that should avoid echo detection."""
        return [
            "Our team shipped the billing release. Customers noticed faster invoices.",
            "The cat sat. The cat sat.",
        ]

    def forward(self, document: StyleDocument) -> RuleResult:
        """Compute Jaccard overlap for each adjacent sentence pair."""
        issues: list[StyleIssue] = []
        pairs = document.sentence_tokens()
        for (_, previous_tokens), (sentence, tokens) in zip(pairs, pairs[1:]):
            previous = content_lemmas(previous_tokens)
            current = content_lemmas(tokens)
            if not previous or not current:
                continue
            shared = len(previous & current)
            similarity = shared / len(previous | current)
            if (
                similarity >= self.config.min_similarity
                and shared >= self.config.min_shared
            ):
                issues.append(
                    self.issue(sentence, "This sentence echoes the previous one")
                )
        return RuleResult(issues=issues)
