"""Detect the same word coming back too soon.

Objective: Flag a content word whose lemma already appeared within a short
token lookback window, so the writer can cut or vary the repetition.

Example Rule Violations:
    - "The garden was green and the garden was quiet."
      "garden" returns six tokens after its first use.
    - "We tested the parser, then tested it again."
      "tested" repeats inside the lookback window.

Example Non-Violations:
    - "The garden was quiet this morning."
      No content lemma repeats.
    - "The the a an of."
      Only stopwords repeat, and stopwords are ignored.

Severity: Low; each repeat is a suggestion with a delete fix on the echo.
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
from freewrite.style.rules.helpers import is_content_lemma


@dataclass
class RepeatedLemmaRuleConfig(RuleConfig):
    """Config for nearby lemma repetition."""

    window: int
    severity: str


class RepeatedLemmaRule(Rule[RepeatedLemmaRuleConfig]):
    """Flag a content lemma repeated within a token lookback window."""

    name = "repeated_lemma"
    category = StyleCategory.REDUNDANCY

    def example_violations(self) -> list[str]:
        """Return samples that should trigger nearby repetition."""
        return [
            "The garden was green and the garden was quiet.",
            "We tested the parser, then tested it again.",
        ]

    def example_non_violations(self) -> list[str]:
        """Return samples that should avoid nearby repetition."""
        return [
            "The garden was quiet this morning.",
            "The the a an of.",
        ]

    def forward(self, document: StyleDocument) -> RuleResult:
        """Scan tokens left to right, tracking where each lemma last appeared."""
        issues: list[StyleIssue] = []
        last_seen: dict[str, int] = {}
        for index, token in enumerate(document.tokens):
            lemma = token.lemma
            if not is_content_lemma(lemma):
                continue
            previous = last_seen.get(lemma)
            if previous is not None and index - previous <= self.config.window:
                issues.append(
                    self.issue(
                        token.range,
                        f'Repeated word "{token.text}" nearby',
                        fix=StyleFix.delete(token.range),
                        ignored_key=lemma,
                    )
                )
            last_seen[lemma] = index
        return RuleResult(issues=issues)
