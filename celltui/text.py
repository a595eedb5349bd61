"""Grapheme-aware text primitives: characters, colours, styles and cells."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from functools import lru_cache

import regex
from wcwidth import wcwidth

_GRAPHEME = regex.compile(r"\X")
_EMOJI_PRESENTATION = "\ufe0f"


@dataclass(frozen=True)
class Character:
    """A single grapheme cluster and the number of cells it occupies."""

    grapheme: str = ""
    width: int = 0


@lru_cache(maxsize=4096)
def grapheme_width(grapheme: str) -> int:
    """Return the display width of a grapheme cluster in terminal cells."""
    if not grapheme:
        return 0
    width = max(max(wcwidth(ch), 0) for ch in grapheme)
    if width == 1 and _EMOJI_PRESENTATION in grapheme:
        width = 2
    return width


def characters(text: str) -> list[Character]:
    """Split text into grapheme clusters, each with its display width."""
    return [Character(g, grapheme_width(g)) for g in _GRAPHEME.findall(text)]


def _check_byte(name: str, value: int) -> int:
    if not 0 <= value <= 255:
        raise ValueError(f"{name} must be in 0..255, got {value}")
    return value


@dataclass(frozen=True)
class Color:
    """A terminal colour: the default colour, a palette index or an RGB value."""

    index: int | None = None
    components: tuple[int, int, int] | None = None

    def __post_init__(self) -> None:
        if self.index is not None and self.components is not None:
            raise ValueError("a colour is either indexed or RGB, not both")
        if self.index is not None:
            _check_byte("index", self.index)
        if self.components is not None:
            if len(self.components) != 3:
                raise ValueError("an RGB colour has exactly three components")
            for name, value in zip("rgb", self.components):
                _check_byte(name, value)

    @classmethod
    def rgb(cls, r: int, g: int, b: int) -> Color:
        """Create a true-colour value."""
        return cls(components=(r, g, b))

    @classmethod
    def indexed(cls, index: int) -> Color:
        """Create a palette colour."""
        return cls(index=index)

    @property
    def is_default(self) -> bool:
        return self.index is None and self.components is None

    def params(self) -> list[int]:
        """Return the colour's parameters: [r, g, b], [index] or []."""
        if self.components is not None:
            return list(self.components)
        if self.index is not None:
            return [self.index]
        return []


class Attribute(enum.IntFlag):
    NONE = 0
    BOLD = 1
    DIM = 2
    ITALIC = 4
    BLINK = 8
    REVERSE = 16
    INVISIBLE = 32
    STRIKETHROUGH = 64


class UnderlineStyle(enum.IntEnum):
    OFF = 0
    SINGLE = 1
    DOUBLE = 2
    CURLY = 3
    DOTTED = 4
    DASHED = 5


class CursorStyle(enum.IntEnum):
    DEFAULT = 0
    BLOCK_BLINKING = 1
    BLOCK = 2
    UNDERLINE_BLINKING = 3
    UNDERLINE = 4
    BEAM_BLINKING = 5
    BEAM = 6


@dataclass(frozen=True)
class Style:
    """Visual attributes applied to a cell."""

    foreground: Color = field(default_factory=Color)
    background: Color = field(default_factory=Color)
    underline_color: Color = field(default_factory=Color)
    underline_style: UnderlineStyle = UnderlineStyle.OFF
    attribute: Attribute = Attribute.NONE
    hyperlink: str = ""
    hyperlink_params: str = ""


@dataclass(frozen=True)
class Cell:
    """A character together with its style."""

    character: Character = field(default_factory=Character)
    style: Style = field(default_factory=Style)

    @property
    def grapheme(self) -> str:
        return self.character.grapheme

    @property
    def width(self) -> int:
        return self.character.width


@dataclass(frozen=True)
class Segment:
    """A run of text printed with one style."""

    text: str = ""
    style: Style = field(default_factory=Style)