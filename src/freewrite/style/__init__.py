"""Prose style analyzer: redundancy, style, punctuation, typography, semantics."""

from .analysis import (
    StyleCategory,
    StyleDocument,
    StyleFix,
    StyleIssue,
    StyleSeverity,
)
from .analyzer import (
    AnalysisReport,
    StyleAnalyzer,
    analyze,
    apply_fix,
    apply_fixes,
    filter_ignored,
)
from .rules import Pipeline

__all__ = [
    "AnalysisReport",
    "Pipeline",
    "StyleAnalyzer",
    "StyleCategory",
    "StyleDocument",
    "StyleFix",
    "StyleIssue",
    "StyleSeverity",
    "analyze",
    "apply_fix",
    "apply_fixes",
    "filter_ignored",
]
