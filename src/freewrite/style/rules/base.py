"""Shared base types for rule definitions."""


from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Generic, Mapping, TypeVar, cast, get_args, get_origin

from freewrite.ranges import TextRange
from freewrite.style.analysis import (
    RuleResult,
    StyleCategory,
    StyleDocument,
    StyleFix,
    StyleIssue,
    StyleSeverity,
)


@dataclass
class RuleConfig:
    """Base config container inherited by concrete rule configs."""

    def to_dict(self) -> dict[str, object]:
        """Serialize the config dataclass to a plain dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(
        cls: type["ConfigFromDictT"], raw: Mapping[str, object]
    ) -> "ConfigFromDictT":
        """Instantiate a config dataclass from a plain dictionary."""
        return cls(**dict(raw))


ConfigT = TypeVar("ConfigT", bound=RuleConfig)
ConfigFromDictT = TypeVar("ConfigFromDictT", bound=RuleConfig)
RuleFromDictT = TypeVar("RuleFromDictT", bound="Rule[RuleConfig]")


class Rule(ABC, Generic[ConfigT]):
    """Base rule class exposing a forward pass over a style document."""

    name: str = "rule"
    category: StyleCategory = StyleCategory.STYLE

    def __init__(self, config: ConfigT) -> None:
        """Initialize a rule with explicit configuration."""
        self.config = config

    def to_dict(self) -> dict[str, object]:
        """Serialize this rule's config as a plain dictionary."""
        return self.config.to_dict()

    @classmethod
    def from_dict(
        cls: type["RuleFromDictT"], raw: Mapping[str, object]
    ) -> "RuleFromDictT":
        """Instantiate a rule from a plain config dictionary."""
        config_type = cls._resolve_config_type()
        config = config_type.from_dict(raw)
        return cls(config)

    @classmethod
    def _resolve_config_type(cls) -> type[RuleConfig]:
        """Infer the concrete config type from ``Rule[Config]`` inheritance."""
        for base in getattr(cls, "__orig_bases__", ()):
            if get_origin(base) is Rule:
                args = get_args(base)
                if len(args) != 1:
                    break
                config_type = args[0]
                if isinstance(config_type, type) and issubclass(
                    config_type, RuleConfig
                ):
                    return cast(type[RuleConfig], config_type)
                break
        raise TypeError(
            f"Could not infer config type for rule class {cls.__name__}. "
            "Ensure it subclasses Rule[ConcreteConfig]."
        )

    @property
    def severity(self) -> StyleSeverity:
        """Return the configured severity, defaulting to info."""
        raw = getattr(self.config, "severity", StyleSeverity.INFO)
        return StyleSeverity(raw)

    def issue(
        self,
        span: TextRange,
        message: str,
        fix: StyleFix | None = None,
        ignored_key: str | None = None,
    ) -> StyleIssue:
        """Build an issue stamped with this rule's category and severity."""
        return StyleIssue(
            category=self.category,
            range=span,
            message=message,
            severity=self.severity,
            fix=fix,
            ignored_key=ignored_key,
            rule=self.name,
        )

    @abstractmethod
    def forward(self, document: StyleDocument) -> RuleResult:
        """Apply the rule and return its issues."""

    @abstractmethod
    def example_violations(self) -> list[str]:
        """Return text samples that should trigger this rule."""

    @abstractmethod
    def example_non_violations(self) -> list[str]:
        """Return text samples that should not trigger this rule."""
