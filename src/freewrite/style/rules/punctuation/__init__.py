"""Punctuation rules."""

from .spacing_rule import PunctuationSpacingRule, PunctuationSpacingRuleConfig
from .unmatched_delimiter_rule import (
    UnmatchedDelimiterRule,
    UnmatchedDelimiterRuleConfig,
)

__all__ = [
    "PunctuationSpacingRule",
    "PunctuationSpacingRuleConfig",
    "UnmatchedDelimiterRule",
    "UnmatchedDelimiterRuleConfig",
]
