"""Core analysis models shared by the style rules."""

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import TypeAlias

from freewrite.linguistics import LinguisticService, Token
from freewrite.ranges import TextRange

Counts: TypeAlias = dict[str, int]
IssuePayload: TypeAlias = dict[str, object]


class StyleCategory(StrEnum):
    """Family an issue belongs to."""

    REDUNDANCY = "Redundancy"
    STYLE = "Style"
    PUNCTUATION = "Punctuation"
    TYPOGRAPHY = "Typography"
    SEMANTICS = "Semantics"


class StyleSeverity(StrEnum):
    """How strongly an issue is surfaced."""

    INFO = "info"
    WARNING = "warning"


@dataclass(frozen=True)
class StyleFix:
    """Suggested edit; ``""`` deletes the range, ``None`` only flags it."""

    range: TextRange
    replacement: str | None

    @classmethod
    def delete(cls, span: TextRange) -> "StyleFix":
        """Build a fix that removes ``span``."""
        return cls(range=span, replacement="")

    @classmethod
    def replace(cls, span: TextRange, text: str) -> "StyleFix":
        """Build a fix that replaces ``span`` with ``text``."""
        return cls(range=span, replacement=text)


@dataclass(frozen=True)
class StyleIssue:
    """Canonical issue record emitted by a rule."""

    category: StyleCategory
    range: TextRange
    message: str
    severity: StyleSeverity = StyleSeverity.INFO
    fix: StyleFix | None = None
    ignored_key: str | None = None
    rule: str = ""
    id: int = 0

    def with_id(self, issue_id: int) -> "StyleIssue":
        """Return the issue stamped with its per-pass identifier."""
        return replace(self, id=issue_id)

    def to_payload(self) -> IssuePayload:
        """Serialize a typed issue for tool output."""
        return {
            "id": self.id,
            "rule": self.rule,
            "category": str(self.category),
            "severity": str(self.severity),
            "range": self.range.to_payload(),
            "message": self.message,
            "fix": (
                {
                    "range": self.fix.range.to_payload(),
                    "replacement": self.fix.replacement,
                }
                if self.fix is not None
                else None
            ),
            "ignored_key": self.ignored_key,
        }


@dataclass(frozen=True)
class StyleDocument:
    """Precomputed text views consumed by rules in forward passes."""

    text: str
    tokens: tuple[Token, ...]
    sentences: tuple[TextRange, ...]
    paragraphs: tuple[TextRange, ...]

    @classmethod
    def from_text(cls, text: str, service: LinguisticService) -> "StyleDocument":
        """Build a document with token, sentence and paragraph projections."""
        return cls(
            text=text,
            tokens=tuple(service.tokens(text)),
            sentences=tuple(service.sentences(text)),
            paragraphs=tuple(split_paragraphs(text)),
        )

    def tokens_in(self, span: TextRange) -> list[Token]:
        """Return the tokens that overlap ``span``."""
        return [token for token in self.tokens if token.range.intersects(span)]

    def sentence_tokens(self) -> list[tuple[TextRange, list[Token]]]:
        """Pair each sentence range with its tokens."""
        return [(sentence, self.tokens_in(sentence)) for sentence in self.sentences]


@dataclass
class RuleResult:
    """Output payload emitted by a single rule invocation."""

    issues: list[StyleIssue] = field(default_factory=list)


@dataclass(frozen=True)
class AnalysisState:
    """Immutable accumulator carrying merged rule output."""

    issues: tuple[StyleIssue, ...]

    @classmethod
    def initial(cls) -> "AnalysisState":
        """Construct an empty state."""
        return cls(issues=())

    def merge(self, result: RuleResult) -> "AnalysisState":
        """Merge one rule result into a new state instance."""
        return AnalysisState(issues=self.issues + tuple(result.issues))


def category_counts(issues: Iterable[StyleIssue]) -> Counts:
    """Count issues per category, listing every category."""
    counts: Counts = {str(category): 0 for category in StyleCategory}
    for issue in issues:
        counts[str(issue.category)] += 1
    return counts


def split_paragraphs(text: str) -> list[TextRange]:
    """Split on blank-line separators, keeping each piece's offset."""
    paragraphs: list[TextRange] = []
    offset = 0
    for piece in text.split("\n\n"):
        paragraphs.append(TextRange(offset, len(piece)))
        offset += len(piece) + 2
    return paragraphs
