"""Style resolver: turns a scene into a render plan.

Everything here is pure and Qt-free. ``resolve_render_plan`` decides *what*
to draw (text lines and a box variant); ``layout_box`` turns the box into
pixel rectangles for a given canvas; the painter in ``scene_painter`` does
the actual drawing.

Out-of-range values: opacity is clamped to 0-100 when computing alpha;
font size and padding are passed through unchanged.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from src.models.scene import SceneState
from src.models.style import BoxStyle, BoxType, TextAlign, TextStyle
from src.utils.config import (
    CONTENT_SIDE_PADDING,
    GRADIENT_FADE_MARGIN_PERCENT,
    OPACITY_MAX,
    OPACITY_MIN,
    PANEL_INNER_PADDING,
    PANEL_SIDE_MARGIN,
)


# ------------------------------------------------------------------ Color

@dataclass(frozen=True, slots=True)
class Rgba:
    r: int
    g: int
    b: int
    a: float  # 0.0-1.0

    def css(self) -> str:
        return f"rgba({self.r}, {self.g}, {self.b}, {self.a:g})"

    def alpha_byte(self) -> int:
        return round(self.a * 255)


TRANSPARENT = Rgba(0, 0, 0, 0.0)

_HEX_PAIR_RE = re.compile(r"^[0-9a-fA-F]{2}$")


def _channel(hex_color: str, start: int) -> int:
    try:
        digits = hex_color[start:start + 2]
    except TypeError:
        return 0
    if not isinstance(digits, str) or not _HEX_PAIR_RE.match(digits):
        return 0
    return int(digits, 16)


def hex_to_rgba(hex_color: str, opacity_percent: int) -> Rgba:
    """Combine a ``#rrggbb`` color and a 0-100 opacity into one paint value.

    Each channel is parsed from its own two hex digits; an unparsable
    channel becomes 0.

    >>> hex_to_rgba("#000000", 80).css()
    'rgba(0, 0, 0, 0.8)'
    """
    opacity = max(OPACITY_MIN, min(OPACITY_MAX, opacity_percent))
    return Rgba(
        r=_channel(hex_color, 1),
        g=_channel(hex_color, 3),
        b=_channel(hex_color, 5),
        a=opacity / 100,
    )


# ------------------------------------------------------------------ Plan types

@dataclass(frozen=True, slots=True)
class TextLine:
    """One resolved line of text."""

    role: str          # "name", "dialogue", "secondary"
    text: str
    font_family: str
    font_size_px: int
    color: str
    italic: bool
    outline: bool


@dataclass(frozen=True, slots=True)
class BoxDecoration:
    border_width: int = 0
    border_color: str = ""
    corner_radius: int = 0
    glow_radius: int = 0
    glow_color: Rgba = TRANSPARENT


# Decoration per bordered box variant.
PANEL_DECORATIONS = {
    BoxType.SOLID: BoxDecoration(corner_radius=8),
    BoxType.FANTASY: BoxDecoration(
        border_width=4,
        border_color="#b8860b",
        corner_radius=4,
        glow_radius=15,
        glow_color=Rgba(184, 134, 11, 0.5),
    ),
    BoxType.ROMANCE: BoxDecoration(border_width=2, border_color="#ffb6c1", corner_radius=24),
}


@dataclass(frozen=True, slots=True)
class GradientBox:
    """Full-width bottom band fading from ``paint`` to transparent upwards."""

    paint: Rgba
    padding_percent: int
    text_align: TextAlign
    fade_margin_percent: int = GRADIENT_FADE_MARGIN_PERCENT

    def fade_span(self, container_height: float) -> float:
        """Height of the fade that does not depend on the text block."""
        return container_height * (self.padding_percent + self.fade_margin_percent) / 100


@dataclass(frozen=True, slots=True)
class PanelBox:
    """Centered inset block near the bottom edge (solid, fantasy, romance)."""

    kind: BoxType
    paint: Rgba
    padding_percent: int
    text_align: TextAlign
    decoration: BoxDecoration
    side_margin: int = PANEL_SIDE_MARGIN
    inner_padding: int = PANEL_INNER_PADDING


Box = Union[GradientBox, PanelBox]


@dataclass(frozen=True, slots=True)
class RenderPlan:
    lines: tuple[TextLine, ...]
    box: Box

    @property
    def text_align(self) -> TextAlign:
        return self.box.text_align


@dataclass(frozen=True, slots=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def bottom(self) -> float:
        return self.y + self.height


@dataclass(frozen=True, slots=True)
class BoxGeometry:
    box: Rect        # painted area
    text: Rect       # area the text block is laid out in


# ------------------------------------------------------------------ Resolver

def _resolve_line(role: str, text: str, style: TextStyle) -> TextLine | None:
    # Whitespace-only text is suppressed like empty text.
    if not text or not text.strip():
        return None
    return TextLine(
        role=role,
        text=text,
        font_family=style.font_family,
        font_size_px=style.font_size,
        color=style.color,
        italic=style.is_italic,
        outline=style.has_outline,
    )


def resolve_box(box_style: BoxStyle) -> Box:
    paint = hex_to_rgba(box_style.background_color, box_style.opacity)
    if box_style.type == BoxType.GRADIENT:
        return GradientBox(
            paint=paint,
            padding_percent=box_style.padding,
            text_align=box_style.text_align,
        )
    if box_style.type in PANEL_DECORATIONS:
        return PanelBox(
            kind=box_style.type,
            paint=paint,
            padding_percent=box_style.padding,
            text_align=box_style.text_align,
            decoration=PANEL_DECORATIONS[box_style.type],
        )
    raise ValueError(f"Unknown box type: {box_style.type!r}")


def resolve_render_plan(state: SceneState) -> RenderPlan:
    """Resolve the text lines and box of *state*."""
    template = state.template
    candidates = (
        _resolve_line("name", state.character_name, template.name_style),
        _resolve_line("dialogue", state.dialogue, template.dialogue_style),
        _resolve_line("secondary", state.secondary_dialogue, template.secondary_dialogue_style),
    )
    return RenderPlan(
        lines=tuple(line for line in candidates if line is not None),
        box=resolve_box(template.box_style),
    )


def layout_box(box: Box, width: float, height: float, text_height: float) -> BoxGeometry:
    """Place *box* on a ``width`` x ``height`` canvas around a text block.

    Args:
        box: Resolved box variant
        width: Canvas width in pixels
        height: Canvas height in pixels
        text_height: Height of the stacked text lines in pixels

    Returns:
        Rectangles for the painted box and for the text block
    """
    bottom_offset = height * box.padding_percent / 100
    if isinstance(box, GradientBox):
        text_bottom = height - bottom_offset
        text_top = text_bottom - text_height
        box_top = max(0.0, text_top - height * box.fade_margin_percent / 100)
        return BoxGeometry(
            box=Rect(0, box_top, width, height - box_top),
            text=Rect(
                CONTENT_SIDE_PADDING,
                text_top,
                max(0.0, width - 2 * CONTENT_SIDE_PADDING),
                text_height,
            ),
        )
    if isinstance(box, PanelBox):
        box_width = max(0.0, width - 2 * box.side_margin)
        box_height = text_height + 2 * box.inner_padding
        box_bottom = height - bottom_offset
        box_rect = Rect(box.side_margin, box_bottom - box_height, box_width, box_height)
        return BoxGeometry(
            box=box_rect,
            text=Rect(
                box_rect.x + box.inner_padding,
                box_rect.y + box.inner_padding,
                max(0.0, box_width - 2 * box.inner_padding),
                text_height,
            ),
        )
    raise TypeError(f"Unknown box: {box!r}")
