"""Style rules."""

from .adverb_density_rule import AdverbDensityRule, AdverbDensityRuleConfig
from .filler_noun_rule import FillerNounRule, FillerNounRuleConfig
from .hedge_phrase_rule import HedgePhraseRule, HedgePhraseRuleConfig
from .long_sentence_rule import LongSentenceRule, LongSentenceRuleConfig
from .repeated_start_rule import RepeatedStartRule, RepeatedStartRuleConfig
from .weak_intensifier_rule import WeakIntensifierRule, WeakIntensifierRuleConfig
from .weak_opener_rule import WeakOpenerRule, WeakOpenerRuleConfig
from .wordy_phrase_rule import WordyPhraseRule, WordyPhraseRuleConfig

__all__ = [
    "AdverbDensityRule",
    "AdverbDensityRuleConfig",
    "FillerNounRule",
    "FillerNounRuleConfig",
    "HedgePhraseRule",
    "HedgePhraseRuleConfig",
    "LongSentenceRule",
    "LongSentenceRuleConfig",
    "RepeatedStartRule",
    "RepeatedStartRuleConfig",
    "WeakIntensifierRule",
    "WeakIntensifierRuleConfig",
    "WeakOpenerRule",
    "WeakOpenerRuleConfig",
    "WordyPhraseRule",
    "WordyPhraseRuleConfig",
]
