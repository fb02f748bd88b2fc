"""Redundancy rules."""

from .echo_sentence_rule import EchoSentenceRule, EchoSentenceRuleConfig
from .repeated_lemma_rule import RepeatedLemmaRule, RepeatedLemmaRuleConfig
from .repeated_ngram_rule import RepeatedNGramRule, RepeatedNGramRuleConfig

__all__ = [
    "EchoSentenceRule",
    "EchoSentenceRuleConfig",
    "RepeatedLemmaRule",
    "RepeatedLemmaRuleConfig",
    "RepeatedNGramRule",
    "RepeatedNGramRuleConfig",
]
