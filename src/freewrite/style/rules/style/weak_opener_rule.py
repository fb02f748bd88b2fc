"""Detect sentences opening with an expletive construction.

Objective: Catch sentences that begin with "there is", "it seems" and
similar openers that delay the real subject.

Example Rule Violations:
    - "There are three reasons to wait."
    - "It seems the build is broken."

Example Non-Violations:
    - "Three reasons argue for waiting."
    - "Thereafter the build broke."
      The opener must end on a word boundary.

Severity: Low; the sentence is flagged without a fix.
"""


import re
from dataclasses import dataclass

from freewrite.style.analysis import (
    RuleResult,
    StyleCategory,
    StyleDocument,
    StyleIssue,
)

from freewrite.style.rules.base import Rule, RuleConfig
from freewrite.style.rules.helpers import EXPLETIVE_STARTS

_OPENER_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
    (opener, re.compile(rf"{re.escape(opener)}\b", re.IGNORECASE))
    for opener in EXPLETIVE_STARTS
)


@dataclass
class WeakOpenerRuleConfig(RuleConfig):
    """Config for expletive opener detection."""

    severity: str


class WeakOpenerRule(Rule[WeakOpenerRuleConfig]):
    """Flag sentences that start with an expletive phrase."""

    name = "weak_opener"
    category = StyleCategory.STYLE

    def example_violations(self) -> list[str]:
        """Return samples that should trigger weak opener matches."""
        return ["There are three reasons to wait.", "It seems the build is broken."]

    def example_non_violations(self) -> list[str]:
        """Return samples that should avoid weak opener matches."""
        return ["Three reasons argue for waiting.", "Thereafter the build broke."]

    def forward(self, document: StyleDocument) -> RuleResult:
        """Check the trimmed start of every sentence, ignoring case."""
        issues: list[StyleIssue] = []
        for sentence in document.sentences:
            opening = sentence.slice(document.text).lstrip()
            for opener, pattern in _OPENER_PATTERNS:
                if pattern.match(opening):
                    issues.append(
                        self.issue(
                            sentence,
                            f'Weak opener "{opener}"; make the subject concrete',
                            ignored_key=opener,
                        )
                    )
                    break
        return RuleResult(issues=issues)
