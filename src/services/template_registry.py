"""Template registry - built-in catalog and user template operations.

All operations take a ``SceneState`` and return a new one; the input state
is never modified. Templates always move between the catalog, the saved
list and the live slot as deep copies.
"""

from __future__ import annotations

import logging
import uuid

from src.models.scene import SceneState
from src.models.style import BoxStyle, BoxType, TextAlign, TextStyle
from src.models.template import SceneTemplate

logger = logging.getLogger(__name__)

CUSTOM_ID_PREFIX = "custom-"

_BUILTIN_TEMPLATES: tuple[SceneTemplate, ...] = (
    SceneTemplate(
        template_id="cinematic",
        name="Cinematic (Default)",
        name_style=TextStyle("sans-serif", 24, "#ffffff", has_outline=True, is_italic=False),
        dialogue_style=TextStyle("sans-serif", 32, "#ffffff", has_outline=True, is_italic=False),
        secondary_dialogue_style=TextStyle("sans-serif", 20, "#cccccc", has_outline=True, is_italic=True),
        box_style=BoxStyle(BoxType.GRADIENT, "#000000", opacity=80, padding=20, text_align=TextAlign.LEFT),
    ),
    SceneTemplate(
        template_id="fantasy",
        name="Fantasy RPG",
        name_style=TextStyle("serif", 28, "#ffd700", has_outline=True, is_italic=False),
        dialogue_style=TextStyle("serif", 28, "#ffffff", has_outline=True, is_italic=False),
        secondary_dialogue_style=TextStyle("serif", 18, "#cccccc", has_outline=True, is_italic=True),
        box_style=BoxStyle(BoxType.FANTASY, "#1a1a1a", opacity=90, padding=15, text_align=TextAlign.LEFT),
    ),
    SceneTemplate(
        template_id="romance",
        name="Romance / Otome",
        name_style=TextStyle("serif", 26, "#ff69b4", has_outline=False, is_italic=False),
        dialogue_style=TextStyle("sans-serif", 28, "#333333", has_outline=False, is_italic=False),
        secondary_dialogue_style=TextStyle("sans-serif", 18, "#666666", has_outline=False, is_italic=True),
        box_style=BoxStyle(BoxType.ROMANCE, "#ffffff", opacity=85, padding=10, text_align=TextAlign.CENTER),
    ),
)

_BUILTIN_IDS = frozenset(t.template_id for t in _BUILTIN_TEMPLATES)

DEFAULT_TEMPLATE_ID = "cinematic"


# ------------------------------------------------------------------ Query

def list_builtins() -> list[SceneTemplate]:
    """Return copies of the built-in templates in declaration order."""
    return [t.copy() for t in _BUILTIN_TEMPLATES]


def is_builtin_id(template_id: str) -> bool:
    return template_id in _BUILTIN_IDS


def get_builtin(template_id: str) -> SceneTemplate | None:
    for t in _BUILTIN_TEMPLATES:
        if t.template_id == template_id:
            return t.copy()
    return None


def find_template(state: SceneState, template_id: str) -> SceneTemplate | None:
    """Look up a built-in or saved template by id (returns a copy)."""
    builtin = get_builtin(template_id)
    if builtin is not None:
        return builtin
    for t in state.saved_templates:
        if t.template_id == template_id:
            return t.copy()
    return None


def new_template_id(state: SceneState) -> str:
    """Return an id not used by any saved or built-in template."""
    taken = set(state.saved_template_ids()) | _BUILTIN_IDS
    while True:
        template_id = f"{CUSTOM_ID_PREFIX}{uuid.uuid4().hex[:12]}"
        if template_id not in taken:
            return template_id


# ------------------------------------------------------------------ Operations

def apply_template(state: SceneState, template: SceneTemplate | str) -> SceneState:
    """Make a copy of *template* (or the template with that id) the live template.

    Unknown ids leave the state unchanged.
    """
    if isinstance(template, str):
        source = find_template(state, template)
        if source is None:
            logger.debug(f"apply_template: unknown id {template!r}")
            return state
    else:
        source = template.copy()
    result = state.copy()
    result.template = source
    return result


def save_as_template(state: SceneState, name: str) -> SceneState:
    """Save the live template under *name* and make the saved copy live.

    A blank name is ignored.
    """
    name = (name or "").strip()
    if not name:
        return state
    result = state.copy()
    saved = result.template.copy()
    saved.template_id = new_template_id(state)
    saved.name = name
    result.saved_templates.append(saved)
    result.template = saved.copy()
    logger.info(f"Saved template {name!r} as {saved.template_id}")
    return result


def delete_template(state: SceneState, template_id: str) -> SceneState:
    """Remove a saved template. Unknown ids are ignored.

    Built-in templates never live in ``saved_templates`` and so cannot be
    deleted. The live template is left as it is even when its id is removed.
    """
    if template_id not in state.saved_template_ids():
        return state
    result = state.copy()
    result.saved_templates = [
        t for t in result.saved_templates if t.template_id != template_id
    ]
    logger.info(f"Deleted template {template_id}")
    return result


def rename_template(state: SceneState, template_id: str, name: str) -> SceneState:
    """Rename a saved template (and the live one, if it has the same id)."""
    name = (name or "").strip()
    if not name or template_id not in state.saved_template_ids():
        return state
    result = state.copy()
    for t in result.saved_templates:
        if t.template_id == template_id:
            t.name = name
    if result.template.template_id == template_id:
        result.template.name = name
    return result


def overwrite_template(state: SceneState, template_id: str) -> SceneState:
    """Replace a saved template's styles with the live template's.

    The saved record keeps its id and name; built-in ids are ignored.
    """
    if template_id not in state.saved_template_ids():
        return state
    result = state.copy()
    for i, t in enumerate(result.saved_templates):
        if t.template_id == template_id:
            updated = result.template.copy()
            updated.template_id = t.template_id
            updated.name = t.name
            result.saved_templates[i] = updated
    return result
