"""Detect short phrases recurring across nearby sentences.

Objective: Find runs of consecutive lemmas (three by default) that recur
within a few sentences of their previous appearance.

Example Rule Violations:
    - "The cat sat. The cat sat."
      "the cat sat" recurs one sentence later.

Example Non-Violations:
    - "The cat sat on the mat. A dog slept by the door."
      No three-lemma window repeats.

Severity: Low; the later copy gets a delete fix.
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
from freewrite.style.rules.helpers import covering_range


@dataclass
class RepeatedNGramRuleConfig(RuleConfig):
    """Config for repeated n-gram detection."""

    n: int
    sentence_window: int
    severity: str


class RepeatedNGramRule(Rule[RepeatedNGramRuleConfig]):
    """Flag lemma n-grams that recur within a sentence window."""

    name = "repeated_ngram"
    category = StyleCategory.REDUNDANCY

    def example_violations(self) -> list[str]:
        """Return samples that should trigger n-gram reuse."""
        return ["The cat sat. The cat sat."]

    def example_non_violations(self) -> list[str]:
        """Return samples that should avoid n-gram reuse."""
        return ["The cat sat on the mat. A dog slept by the door."]

    def forward(self, document: StyleDocument) -> RuleResult:
        """Slide an n-token window over each sentence."""
        issues: list[StyleIssue] = []
        size = self.config.n
        if size <= 0:
            return RuleResult()

        seen: dict[str, int] = {}
        for sentence_index, (_, tokens) in enumerate(document.sentence_tokens()):
            for start in range(len(tokens) - size + 1):
                window = tokens[start : start + size]
                key = " ".join(token.lemma for token in window)
                previous = seen.get(key)
                if (
                    previous is not None
                    and sentence_index - previous <= self.config.sentence_window
                ):
                    span = covering_range(window)
                    issues.append(
                        self.issue(
                            span,
                            "Repeated phrase appears in nearby sentences",
                            fix=StyleFix.delete(span),
                            ignored_key=key,
                        )
                    )
                seen[key] = sentence_index
        return RuleResult(issues=issues)
