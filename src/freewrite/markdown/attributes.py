"""Attribute values and the mutable styled-text buffer they are painted on."""


from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import TypeAlias

from freewrite.config import Color, FontSpec, ParagraphStyle
from freewrite.ranges import TextRange


class AttributeKey(StrEnum):
    """Display attributes a highlight pass can set."""

    FONT = "font"
    FOREGROUND = "foreground_color"
    BACKGROUND = "background_color"
    UNDERLINE = "underline"
    STRIKETHROUGH = "strikethrough"
    PARAGRAPH_STYLE = "paragraph_style"


AttributeValue: TypeAlias = FontSpec | Color | ParagraphStyle | bool
Attributes: TypeAlias = Mapping[AttributeKey, AttributeValue]


@dataclass(frozen=True)
class AttributeSpan:
    """One run of identical attributes over a character range."""

    range: TextRange
    attributes: Mapping[AttributeKey, AttributeValue]

    def get(self, key: AttributeKey) -> AttributeValue | None:
        """Return the value for ``key`` or ``None`` when unset."""
        return self.attributes.get(key)

    def to_payload(self) -> dict[str, object]:
        """Serialize the span for JSON output."""
        payload: dict[str, object] = {"range": self.range.to_payload()}
        for key, value in self.attributes.items():
            if isinstance(value, Color):
                payload[str(key)] = value.to_hex()
            elif isinstance(value, (FontSpec, ParagraphStyle)):
                payload[str(key)] = dict(value.__dict__)
            else:
                payload[str(key)] = value
        return payload


class StyledText:
    """Plain text plus one attribute dictionary per character.

    ``set_attributes`` replaces everything on a range; ``add_attributes``
    overlays keys and leaves the others in place, so later calls win on
    overlap.
    """

    def __init__(self, text: str) -> None:
        """Create an unstyled buffer over ``text``."""
        self.text = text
        self._attributes: list[dict[AttributeKey, AttributeValue]] = [
            {} for _ in range(len(text))
        ]

    def __len__(self) -> int:
        return len(self.text)

    def _bounded(self, span: TextRange) -> range:
        clamped = span.clamped(len(self.text))
        return range(clamped.offset, clamped.end)

    def set_attributes(self, attributes: Attributes, span: TextRange) -> None:
        """Replace all attributes on ``span``."""
        shared = dict(attributes)
        for index in self._bounded(span):
            self._attributes[index] = shared

    def add_attributes(self, attributes: Attributes, span: TextRange) -> None:
        """Overlay ``attributes`` on ``span``."""
        # Keyed by identity so runs sharing one dict share the merged dict too.
        cache: dict[int, tuple[dict, dict[AttributeKey, AttributeValue]]] = {}
        for index in self._bounded(span):
            current = self._attributes[index]
            entry = cache.get(id(current))
            if entry is None:
                entry = (current, {**current, **attributes})
                cache[id(current)] = entry
            self._attributes[index] = entry[1]

    def attributes_at(self, index: int) -> dict[AttributeKey, AttributeValue]:
        """Return a copy of the attributes on one character."""
        return dict(self._attributes[index])

    def spans(self) -> tuple[AttributeSpan, ...]:
        """Coalesce characters into maximal runs of equal attributes."""
        runs: list[AttributeSpan] = []
        start = 0
        for index in range(1, len(self._attributes) + 1):
            if (
                index < len(self._attributes)
                and self._attributes[index] == self._attributes[start]
            ):
                continue
            runs.append(
                AttributeSpan(
                    range=TextRange(start, index - start),
                    attributes=dict(self._attributes[start]),
                )
            )
            start = index
        return tuple(runs)
