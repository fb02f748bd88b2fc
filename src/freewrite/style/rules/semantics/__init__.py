"""Semantic rules."""

from .unclear_reference_rule import UnclearReferenceRule, UnclearReferenceRuleConfig
from .vague_noun_frequency_rule import (
    VagueNounFrequencyRule,
    VagueNounFrequencyRuleConfig,
)

__all__ = [
    "UnclearReferenceRule",
    "UnclearReferenceRuleConfig",
    "VagueNounFrequencyRule",
    "VagueNounFrequencyRuleConfig",
]
