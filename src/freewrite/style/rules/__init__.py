"""Rule framework exports."""

from .base import Rule, RuleConfig
from .pipeline import Pipeline, build_default_rules
from .registry import DEFAULT_RULE_TYPES, RuleList

__all__ = [
    "DEFAULT_RULE_TYPES",
    "Pipeline",
    "Rule",
    "RuleConfig",
    "RuleList",
    "build_default_rules",
]
