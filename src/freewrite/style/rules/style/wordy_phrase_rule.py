"""Detect wordy phrases with a shorter equivalent.

Objective: Replace stock padding such as "in order to" or "due to the
fact that" with the short form from a fixed table.

Example Rule Violations:
    - "We refactored the module in order to test it."
      Suggests "to".
    - "Due to the fact that it rained, we stayed in."
      Suggests "Because", keeping the capital.

Example Non-Violations:
    - "We refactored the module to test it."

Severity: Low; each occurrence carries a replacement fix.
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
from freewrite.style.rules.helpers import WORDY_PHRASES, find_phrase, match_case


@dataclass
class WordyPhraseRuleConfig(RuleConfig):
    """Config for wordy phrase replacement."""

    severity: str


class WordyPhraseRule(Rule[WordyPhraseRuleConfig]):
    """Suggest the short form of each wordy phrase."""

    name = "wordy_phrase"
    category = StyleCategory.STYLE

    def example_violations(self) -> list[str]:
        """Return samples that should trigger wordy phrase matches."""
        return [
            "We refactored the module in order to test it.",
            "Due to the fact that it rained, we stayed in.",
        ]

    def example_non_violations(self) -> list[str]:
        """Return samples that should avoid wordy phrase matches."""
        return ["We refactored the module to test it."]

    def forward(self, document: StyleDocument) -> RuleResult:
        """Search each sentence for every table phrase, ignoring case."""
        issues: list[StyleIssue] = []
        for sentence in document.sentences:
            body = sentence.slice(document.text)
            for phrase, replacement in WORDY_PHRASES.items():
                for local in find_phrase(body, phrase):
                    span = local.shifted(sentence.offset)
                    suggestion = match_case(span.slice(document.text), replacement)
                    issues.append(
                        self.issue(
                            span,
                            f'Wordy phrase "{phrase}"',
                            fix=StyleFix.replace(span, suggestion),
                            ignored_key=phrase,
                        )
                    )
        return RuleResult(issues=issues)
