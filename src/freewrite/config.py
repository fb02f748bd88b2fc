"""Immutable per-pass style configuration and the theme-derived palette."""


from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields, replace
from enum import StrEnum
from typing import Any

MAX_HIGHLIGHT_LENGTH = 20_000
"""Buffers longer than this only receive base attributes."""


class ColorTheme(StrEnum):
    """Host appearance the palette is derived for."""

    LIGHT = "light"
    DARK = "dark"


class TypewriterMode(StrEnum):
    """Whether the focus fade is active."""

    NORMAL = "normal"
    TYPEWRITER = "typewriter"


class HighlightScope(StrEnum):
    """Unit of text kept unfaded around the caret in typewriter mode."""

    LINE = "line"
    SENTENCE = "sentence"
    PARAGRAPH = "paragraph"


@dataclass(frozen=True)
class Color:
    """RGBA color with components in ``[0, 1]``."""

    red: float
    green: float
    blue: float
    alpha: float = 1.0

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Parse ``#RRGGBB`` or ``#RRGGBBAA``."""
        raw = value.lstrip("#")
        if len(raw) not in (6, 8):
            raise ValueError(f"Invalid color literal: {value!r}")
        channels = [int(raw[index : index + 2], 16) / 255 for index in range(0, len(raw), 2)]
        return cls(*channels)

    def with_alpha(self, alpha: float) -> "Color":
        """Return the same color with a different alpha component."""
        return replace(self, alpha=alpha)

    def to_hex(self) -> str:
        """Serialize as ``#RRGGBBAA``."""
        channels = (self.red, self.green, self.blue, self.alpha)
        return "#" + "".join(f"{round(channel * 255):02x}" for channel in channels)


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)

# System accent colors, light appearance first.
_SYSTEM_COLORS: dict[str, tuple[Color, Color]] = {
    "blue": (Color.from_hex("#007aff"), Color.from_hex("#0a84ff")),
    "teal": (Color.from_hex("#30b0c7"), Color.from_hex("#40c8e0")),
    "yellow": (Color.from_hex("#ffcc00"), Color.from_hex("#ffd60a")),
    "orange": (Color.from_hex("#ff9500"), Color.from_hex("#ff9f0a")),
    "gray": (Color.from_hex("#8e8e93"), Color.from_hex("#98989d")),
    "brown": (Color.from_hex("#a2845e"), Color.from_hex("#ac8e68")),
    "red": (Color.from_hex("#ff3b30"), Color.from_hex("#ff453a")),
}


@dataclass(frozen=True)
class FontSpec:
    """Font request resolved by the host against its font system."""

    family: str
    size: float
    bold: bool = False
    italic: bool = False
    monospace: bool = False

    def with_traits(self, *, bold: bool = False, italic: bool = False) -> "FontSpec":
        """Return this font with bold/italic traits added."""
        return replace(self, bold=self.bold or bold, italic=self.italic or italic)

    def scaled(self, factor: float) -> "FontSpec":
        """Return this font with its point size multiplied by ``factor``."""
        return replace(self, size=self.size * factor)


@dataclass(frozen=True)
class ParagraphStyle:
    """Paragraph layout attributes applied per line."""

    line_spacing: float
    first_line_head_indent: float = 0.0
    head_indent: float = 0.0


@dataclass(frozen=True)
class StyleConfig:
    """Configuration value read by one highlight pass.

    Instances are never mutated; use :meth:`with_changes` to derive a new
    configuration and hand it to the session between passes.
    """

    font_family: str = "system-ui"
    font_size: float = 16.0
    text_color: Color = BLACK
    background_color: Color = WHITE
    line_spacing: float = 4.0
    theme: ColorTheme = ColorTheme.LIGHT
    typewriter_mode: TypewriterMode = TypewriterMode.NORMAL
    highlight_scope: HighlightScope = HighlightScope.LINE
    mark_current_line: bool = False
    fixed_scroll: bool = False

    @property
    def typewriter_enabled(self) -> bool:
        """Return whether the focus fade is active."""
        return self.typewriter_mode is TypewriterMode.TYPEWRITER

    @property
    def is_dark(self) -> bool:
        """Return whether the palette targets a dark appearance."""
        return self.theme is ColorTheme.DARK

    def with_changes(self, **changes: Any) -> "StyleConfig":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def system_color(self, name: str) -> Color:
        """Return a named accent color for the configured theme."""
        light, dark = _SYSTEM_COLORS[name]
        return dark if self.is_dark else light

    # -- fonts -------------------------------------------------------------

    @property
    def base_font(self) -> FontSpec:
        """Return the font used for plain text."""
        return FontSpec(self.font_family, self.font_size)

    @property
    def hidden_token_font(self) -> FontSpec:
        """Return the near-zero font used to collapse hidden tokens."""
        return FontSpec(self.font_family, max(0.1, self.font_size * 0.05))

    @property
    def code_font(self) -> FontSpec:
        """Return the monospace font used for code spans and blocks."""
        return FontSpec(self.font_family, self.font_size * 0.95, monospace=True)

    @property
    def paragraph_style(self) -> ParagraphStyle:
        """Return the default paragraph style."""
        return ParagraphStyle(line_spacing=self.line_spacing)

    # -- palette -----------------------------------------------------------

    @property
    def token_color(self) -> Color:
        return self.text_color.with_alpha(0.45 if self.is_dark else 0.35)

    @property
    def faded_text_color(self) -> Color:
        return self.text_color.with_alpha(0.35 if self.is_dark else 0.4)

    @property
    def hidden_token_color(self) -> Color:
        return self.background_color

    @property
    def muted_text_color(self) -> Color:
        return self.text_color.with_alpha(0.6 if self.is_dark else 0.65)

    @property
    def link_color(self) -> Color:
        return self.system_color("teal" if self.is_dark else "blue")

    @property
    def quote_color(self) -> Color:
        return self.system_color("teal" if self.is_dark else "blue")

    @property
    def mark_background(self) -> Color:
        return self.system_color("yellow").with_alpha(0.25 if self.is_dark else 0.18)

    @property
    def annotation_background(self) -> Color:
        base = self.system_color("teal" if self.is_dark else "blue")
        return base.with_alpha(0.2 if self.is_dark else 0.15)

    @property
    def comment_background(self) -> Color:
        return self.system_color("orange").with_alpha(0.2 if self.is_dark else 0.12)

    @property
    def code_background(self) -> Color:
        return self.system_color("gray").with_alpha(0.3 if self.is_dark else 0.16)

    @property
    def code_color(self) -> Color:
        return self.system_color("orange" if self.is_dark else "brown")

    @property
    def deletion_color(self) -> Color:
        return self.system_color("red")

    @property
    def current_line_background(self) -> Color:
        if self.is_dark:
            return WHITE.with_alpha(0.06)
        return BLACK.with_alpha(0.04)

    # -- serialization -----------------------------------------------------

    def to_dict(self) -> dict[str, object]:
        """Serialize to plain JSON-compatible values."""
        raw = asdict(self)
        raw["text_color"] = self.text_color.to_hex()
        raw["background_color"] = self.background_color.to_hex()
        for key in ("theme", "typewriter_mode", "highlight_scope"):
            raw[key] = str(raw[key])
        return raw

    @classmethod
    def from_dict(cls, raw: Mapping[str, object] | None) -> "StyleConfig":
        """Build a configuration from a mapping, ignoring unknown keys."""
        if raw is None:
            return cls()
        if not isinstance(raw, Mapping):
            raise TypeError("Style configuration must be a mapping")
        allowed = {item.name for item in fields(cls)}
        kwargs: dict[str, Any] = {key: raw[key] for key in raw if key in allowed}
        for key in ("text_color", "background_color"):
            if isinstance(kwargs.get(key), str):
                kwargs[key] = Color.from_hex(kwargs[key])
        if "theme" in kwargs:
            kwargs["theme"] = ColorTheme(kwargs["theme"])
        if "typewriter_mode" in kwargs:
            kwargs["typewriter_mode"] = TypewriterMode(kwargs["typewriter_mode"])
        if "highlight_scope" in kwargs:
            kwargs["highlight_scope"] = HighlightScope(kwargs["highlight_scope"])
        return cls(**kwargs)


DEFAULT_STYLE_CONFIG = StyleConfig()
