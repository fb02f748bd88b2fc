"""Detect paragraphs that open on a pronoun with nothing to point at.

Objective: For each blank-line separated paragraph whose first word is a
vague pronoun ("this", "that", "it", "there"), look for a noun-tagged
token near the start of the paragraph. Without one, the pronoun has no
local antecedent and the opening reads as unclear.

Example Rule Violations:
    - "This is why it matters."
      Opens on "this" and never names a noun.

Example Non-Violations:
    - "This report explains the budget."
      A noun follows the pronoun.
    - "Budgets matter. This is why."
      The paragraph does not open on a pronoun.

Severity: Low; the pronoun is flagged without a fix.
"""


from dataclasses import dataclass

from freewrite.ranges import TextRange
from freewrite.style.analysis import (
    RuleResult,
    StyleCategory,
    StyleDocument,
    StyleIssue,
)

from freewrite.style.rules.base import Rule, RuleConfig
from freewrite.style.rules.helpers import NOUN_TAGS, VAGUE_PRONOUNS, first_word


@dataclass
class UnclearReferenceRuleConfig(RuleConfig):
    """Config for paragraph-opening pronoun checks."""

    lookahead_chars: int
    severity: str


class UnclearReferenceRule(Rule[UnclearReferenceRuleConfig]):
    """Flag paragraph-initial vague pronouns without a nearby noun."""

    name = "unclear_reference"
    category = StyleCategory.SEMANTICS

    def example_violations(self) -> list[str]:
        """Return samples that should trigger unclear references."""
        return ["This is why it matters.", "Budgets matter.\n\nIt is what it is."]

    def example_non_violations(self) -> list[str]:
        """Return samples that should avoid unclear references."""
        return ["This report explains the budget.", "Budgets matter. This is why."]

    def forward(self, document: StyleDocument) -> RuleResult:
        """Inspect the opening word and lookahead window of every paragraph."""
        issues: list[StyleIssue] = []
        for paragraph in document.paragraphs:
            body = paragraph.slice(document.text)
            word = first_word(body)
            if word is None:
                continue
            lower = word.lower()
            if lower not in VAGUE_PRONOUNS:
                continue

            window_end = paragraph.offset + min(
                paragraph.length, self.config.lookahead_chars
            )
            has_noun = any(
                token.part_of_speech in NOUN_TAGS
                for token in document.tokens
                if paragraph.offset <= token.range.offset < window_end
            )
            if has_noun:
                continue

            span = TextRange(paragraph.offset + body.index(word), len(word))
            issues.append(
                self.issue(
                    span, "Unclear reference at paragraph start", ignored_key=lower
                )
            )
        return RuleResult(issues=issues)
