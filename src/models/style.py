"""Text and box style models (pure Python, no Qt dependency)."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from src.utils.config import DEFAULT_FONT_TOKEN, FONT_TOKENS

_HEX_COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")


def is_hex_color(value) -> bool:
    """Return True for a ``#rrggbb`` string."""
    return isinstance(value, str) and bool(_HEX_COLOR_RE.match(value))


def normalize_hex_color(value, default: str) -> str:
    """Return *value* if it is a valid ``#rrggbb`` color, else *default*."""
    return value if is_hex_color(value) else default


def _as_int(value, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default


class BoxType(str, Enum):
    """Dialogue box variant."""

    GRADIENT = "gradient"
    SOLID = "solid"
    FANTASY = "fantasy"
    ROMANCE = "romance"


class TextAlign(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


def _as_enum(enum_cls, value, default):
    try:
        return enum_cls(value)
    except ValueError:
        return default


@dataclass(slots=True)
class TextStyle:
    """Visual style for one line of scene text."""

    font_family: str = DEFAULT_FONT_TOKEN
    font_size: int = 24
    color: str = "#ffffff"
    has_outline: bool = True
    is_italic: bool = False

    def copy(self) -> TextStyle:
        """Return an independent copy."""
        return TextStyle(
            font_family=self.font_family,
            font_size=self.font_size,
            color=self.color,
            has_outline=self.has_outline,
            is_italic=self.is_italic,
        )

    def to_dict(self) -> dict:
        return {
            "fontFamily": self.font_family,
            "fontSize": self.font_size,
            "color": self.color,
            "hasOutline": self.has_outline,
            "isItalic": self.is_italic,
        }

    @classmethod
    def from_dict(cls, data: dict) -> TextStyle:
        """Decode a text style, replacing malformed values with defaults."""
        defaults = cls()
        family = data.get("fontFamily", defaults.font_family)
        if family not in FONT_TOKENS:
            family = DEFAULT_FONT_TOKEN
        return cls(
            font_family=family,
            font_size=_as_int(data.get("fontSize"), defaults.font_size),
            color=normalize_hex_color(data.get("color"), defaults.color),
            has_outline=bool(data.get("hasOutline", defaults.has_outline)),
            is_italic=bool(data.get("isItalic", defaults.is_italic)),
        )


@dataclass(slots=True)
class BoxStyle:
    """Style of the box that holds the name and dialogue lines."""

    type: BoxType = BoxType.GRADIENT
    background_color: str = "#000000"
    opacity: int = 80      # percent, 0-100
    padding: int = 20      # percent of container height, 0-50
    text_align: TextAlign = TextAlign.LEFT

    def copy(self) -> BoxStyle:
        """Return an independent copy."""
        return BoxStyle(
            type=self.type,
            background_color=self.background_color,
            opacity=self.opacity,
            padding=self.padding,
            text_align=self.text_align,
        )

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "backgroundColor": self.background_color,
            "opacity": self.opacity,
            "padding": self.padding,
            "textAlign": self.text_align.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> BoxStyle:
        """Decode a box style, replacing malformed values with defaults."""
        defaults = cls()
        return cls(
            type=_as_enum(BoxType, data.get("type"), defaults.type),
            background_color=normalize_hex_color(
                data.get("backgroundColor"), defaults.background_color
            ),
            opacity=_as_int(data.get("opacity"), defaults.opacity),
            padding=_as_int(data.get("padding"), defaults.padding),
            text_align=_as_enum(TextAlign, data.get("textAlign"), defaults.text_align),
        )
