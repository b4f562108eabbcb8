"""Edits to the live template, validated at the editing boundary.

Out-of-range numbers are clamped, malformed colors and unknown enum values
are dropped, and unknown keys are ignored. Nothing here raises for bad
input: an invalid change is simply not applied.
"""

from __future__ import annotations

import logging

from src.models.scene import SceneState
from src.models.style import BoxType, TextAlign, is_hex_color
from src.models.template import TEXT_ROLES
from src.utils.config import (
    FONT_SIZE_MAX,
    FONT_SIZE_MIN,
    FONT_TOKENS,
    OPACITY_MAX,
    OPACITY_MIN,
    PADDING_MAX,
    PADDING_MIN,
)

logger = logging.getLogger(__name__)


def clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, int(value)))


def _valid_int(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _text_style_changes(changes: dict) -> dict:
    accepted = {}
    for key, value in changes.items():
        if key == "font_family":
            if value in FONT_TOKENS:
                accepted[key] = value
        elif key == "font_size":
            if _valid_int(value):
                accepted[key] = clamp(value, FONT_SIZE_MIN, FONT_SIZE_MAX)
        elif key == "color":
            if is_hex_color(value):
                accepted[key] = value
        elif key in ("has_outline", "is_italic"):
            accepted[key] = bool(value)
        else:
            logger.debug(f"Ignoring unknown text style field {key!r}")
    return accepted


def _box_style_changes(changes: dict) -> dict:
    accepted = {}
    for key, value in changes.items():
        if key == "type":
            try:
                accepted[key] = BoxType(value)
            except ValueError:
                pass
        elif key == "text_align":
            try:
                accepted[key] = TextAlign(value)
            except ValueError:
                pass
        elif key == "background_color":
            if is_hex_color(value):
                accepted[key] = value
        elif key == "opacity":
            if _valid_int(value):
                accepted[key] = clamp(value, OPACITY_MIN, OPACITY_MAX)
        elif key == "padding":
            if _valid_int(value):
                accepted[key] = clamp(value, PADDING_MIN, PADDING_MAX)
        else:
            logger.debug(f"Ignoring unknown box style field {key!r}")
    return accepted


def update_text_style(state: SceneState, role: str, **changes) -> SceneState:
    """Return a state whose live template has the *role* text style edited.

    Args:
        state: Current scene state (not modified)
        role: "name", "dialogue" or "secondary"
        **changes: TextStyle field values

    Returns:
        The new state, or *state* itself if nothing valid was changed
    """
    if role not in TEXT_ROLES:
        return state
    accepted = _text_style_changes(changes)
    if not accepted:
        return state
    result = state.copy()
    style = result.template.text_style(role)
    for key, value in accepted.items():
        setattr(style, key, value)
    return result


def update_box_style(state: SceneState, **changes) -> SceneState:
    """Return a state whose live template has its box style edited."""
    accepted = _box_style_changes(changes)
    if not accepted:
        return state
    result = state.copy()
    for key, value in accepted.items():
        setattr(result.template.box_style, key, value)
    return result


def update_template_name(state: SceneState, name: str) -> SceneState:
    """Rename the live template only; blank names are ignored."""
    name = (name or "").strip()
    if not name:
        return state
    result = state.copy()
    result.template.name = name
    return result
