"""Detect runs of sentences that open with the same word.

Objective: Track the first non-stopword lemma of each sentence and flag
every sentence that extends a run of identical openings to the configured
length.

Example Rule Violations:
    - "Users want speed. Users want clarity. Users want control."
      The third "users" opening completes a run of three.

Example Non-Violations:
    - "Users want speed. Teams want clarity. Users want control."
      The run is broken in the middle.

Severity: Low; flagged without a fix.
"""


from dataclasses import dataclass

from freewrite.style.analysis import (
    RuleResult,
    StyleCategory,
    StyleDocument,
    StyleIssue,
)

from freewrite.style.rules.base import Rule, RuleConfig
from freewrite.style.rules.helpers import is_content_lemma


@dataclass
class RepeatedStartRuleConfig(RuleConfig):
    """Config for repeated sentence openings."""

    min_run: int
    severity: str


class RepeatedStartRule(Rule[RepeatedStartRuleConfig]):
    """Flag consecutive sentences sharing their first content lemma."""

    name = "repeated_start"
    category = StyleCategory.STYLE

    def example_violations(self) -> list[str]:
        """Return samples that should trigger repeated openings."""
        return ["Users want speed. Users want clarity. Users want control."]

    def example_non_violations(self) -> list[str]:
        """Return samples that should avoid repeated openings."""
        return ["Users want speed. Teams want clarity. Users want control."]

    def forward(self, document: StyleDocument) -> RuleResult:
        """Walk sentences in order, counting the current opening run."""
        issues: list[StyleIssue] = []
        previous: str | None = None
        run = 0
        for sentence, tokens in document.sentence_tokens():
            opening = next(
                (token.lemma for token in tokens if is_content_lemma(token.lemma)),
                None,
            )
            # Sentences with no content word leave the run untouched.
            if opening is None:
                continue
            run = run + 1 if opening == previous else 1
            previous = opening
            if run >= self.config.min_run:
                issues.append(
                    self.issue(
                        sentence,
                        f'Several sentences start with "{opening}"; vary the openings',
                        ignored_key=f"start:{opening}",
                    )
                )
        return RuleResult(issues=issues)
