"""Prose style analysis entry points and fix application."""


import logging
from collections.abc import Iterable
from dataclasses import dataclass
from functools import lru_cache

from freewrite.linguistics import LinguisticService, SpacyService

from .analysis import Counts, StyleDocument, StyleFix, StyleIssue, category_counts
from .rules import Pipeline

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisReport:
    """Issues from one pass plus their per-category counts."""

    issues: tuple[StyleIssue, ...]
    counts: Counts

    @property
    def fixable(self) -> int:
        """Return how many issues carry an applicable replacement."""
        return sum(
            1
            for issue in self.issues
            if issue.fix is not None and issue.fix.replacement is not None
        )

    def to_payload(self) -> dict[str, object]:
        """Serialize the report for JSON output."""
        return {
            "issues": [issue.to_payload() for issue in self.issues],
            "counts": self.counts,
            "total": len(self.issues),
            "fixable": self.fixable,
        }


class StyleAnalyzer:
    """Run the rule pipeline over a tokenized snapshot of the text."""

    def __init__(
        self,
        service: LinguisticService | None = None,
        pipeline: Pipeline | None = None,
    ) -> None:
        """Bind a linguistic service and rule pipeline.

        Without a service, the default spaCy model is loaded on first use.
        Without a pipeline, the packaged JSONL defaults are used.
        """
        self._service = service
        self.pipeline = pipeline if pipeline is not None else Pipeline.from_jsonl()

    @property
    def service(self) -> LinguisticService:
        """Return the linguistic service, loading the default lazily."""
        if self._service is None:
            self._service = SpacyService.load()
        return self._service

    def analyze(self, text: str) -> list[StyleIssue]:
        """Return every issue in ``text`` with ids numbered from 1."""
        if not text:
            return []
        document = StyleDocument.from_text(text, self.service)
        state = self.pipeline.forward(document)
        logger.debug(
            "Analyzed %d characters with %d rules: %d issues",
            len(text),
            len(self.pipeline.rules),
            len(state.issues),
        )
        return [
            issue.with_id(issue_id)
            for issue_id, issue in enumerate(state.issues, start=1)
        ]

    def report(self, text: str, ignored_keys: Iterable[str] = ()) -> AnalysisReport:
        """Analyze ``text``, drop ignored issues and count the rest."""
        issues = tuple(filter_ignored(self.analyze(text), ignored_keys))
        return AnalysisReport(issues=issues, counts=category_counts(issues))


@lru_cache(maxsize=1)
def default_analyzer() -> StyleAnalyzer:
    """Return a shared analyzer over the default model and rules."""
    return StyleAnalyzer()


def analyze(
    text: str,
    service: LinguisticService | None = None,
    pipeline: Pipeline | None = None,
) -> list[StyleIssue]:
    """Analyze ``text`` with the given or default service and pipeline."""
    if service is None and pipeline is None:
        return default_analyzer().analyze(text)
    if service is None:
        service = default_analyzer().service
    return StyleAnalyzer(service, pipeline).analyze(text)


def filter_ignored(
    issues: Iterable[StyleIssue], ignored_keys: Iterable[str]
) -> list[StyleIssue]:
    """Drop issues whose ``ignored_key`` the caller chose to ignore."""
    ignored = set(ignored_keys)
    if not ignored:
        return list(issues)
    return [issue for issue in issues if issue.ignored_key not in ignored]


def apply_fix(text: str, fix: StyleFix) -> str:
    """Apply one fix to ``text``; flag-only fixes leave it unchanged."""
    if fix.replacement is None:
        return text
    span = fix.range.clamped(len(text))
    return text[: span.offset] + fix.replacement + text[span.end :]


def apply_fixes(text: str, issues: Iterable[StyleIssue]) -> str:
    """Apply every non-overlapping fix, working from the end of the text.

    When two fixes overlap, the one starting later wins and the other is
    skipped, so every applied range still refers to the original text.
    """
    fixes = sorted(
        {
            issue.fix
            for issue in issues
            if issue.fix is not None and issue.fix.replacement is not None
        },
        key=lambda fix: (fix.range.offset, fix.range.length),
        reverse=True,
    )
    boundary = len(text)
    for fix in fixes:
        if fix.range.end > boundary:
            logger.debug("Skipping overlapping fix at %d", fix.range.offset)
            continue
        text = apply_fix(text, fix)
        boundary = fix.range.offset
    return text
