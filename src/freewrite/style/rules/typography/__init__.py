"""Typography rules."""

from .ellipsis_rule import EllipsisRule, EllipsisRuleConfig
from .em_dash_rule import EmDashRule, EmDashRuleConfig

__all__ = [
    "EllipsisRule",
    "EllipsisRuleConfig",
    "EmDashRule",
    "EmDashRuleConfig",
]
