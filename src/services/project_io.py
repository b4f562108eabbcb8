"""JSON scene encoding and project file save / load.

The JSON layout uses the camelCase keys of the browser version of the
tool, so project files and autosave payloads are interchangeable with it.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from src.models.scene import ImageScale, SceneState
from src.models.template import SceneTemplate
from src.services.template_registry import DEFAULT_TEMPLATE_ID, get_builtin, is_builtin_id

logger = logging.getLogger(__name__)

DEFAULT_CHARACTER_NAME = "Character Name"
DEFAULT_DIALOGUE = "This is an example of dialogue text."
DEFAULT_SECONDARY_DIALOGUE = "これはダイアログテキストの例です。"


class SceneDecodeError(ValueError):
    """Raised when a scene payload is not valid JSON or not a scene."""


def default_scene() -> SceneState:
    """Return the scene shown on first start."""
    return SceneState(
        template=get_builtin(DEFAULT_TEMPLATE_ID),
        image=None,
        image_scale=ImageScale.FIT,
        character_name=DEFAULT_CHARACTER_NAME,
        dialogue=DEFAULT_DIALOGUE,
        secondary_dialogue=DEFAULT_SECONDARY_DIALOGUE,
        saved_templates=[],
    )


def scene_to_dict(state: SceneState) -> dict:
    return {
        "image": state.image,
        "imageScale": state.image_scale.value,
        "characterName": state.character_name,
        "dialogue": state.dialogue,
        "secondaryDialogue": state.secondary_dialogue,
        "template": state.template.to_dict(),
        "savedTemplates": [t.to_dict() for t in state.saved_templates],
    }


def dict_to_scene(data: dict) -> SceneState:
    """Build a scene from decoded JSON.

    Missing top-level fields take their default values. Saved templates with
    a duplicate id keep only the first occurrence; saved templates that
    reuse a builtin id are dropped.

    Raises:
        SceneDecodeError: *data* does not describe a scene
    """
    if not isinstance(data, dict):
        raise SceneDecodeError(f"Expected a JSON object, got {type(data).__name__}")
    defaults = default_scene()
    try:
        template_data = data.get("template")
        template = (
            SceneTemplate.from_dict(template_data) if template_data else defaults.template
        )
        saved: list[SceneTemplate] = []
        seen: set[str] = set()
        for item in data.get("savedTemplates") or []:
            t = SceneTemplate.from_dict(item)
            if is_builtin_id(t.template_id):
                logger.warning(f"Dropping saved template with builtin id {t.template_id}")
                continue
            if t.template_id in seen:
                logger.warning(f"Dropping duplicate saved template id {t.template_id}")
                continue
            seen.add(t.template_id)
            saved.append(t)
        try:
            image_scale = ImageScale(data.get("imageScale", ImageScale.FIT.value))
        except ValueError:
            image_scale = ImageScale.FIT
        image = data.get("image")
        return SceneState(
            template=template,
            image=image if isinstance(image, str) and image else None,
            image_scale=image_scale,
            character_name=str(data.get("characterName", defaults.character_name)),
            dialogue=str(data.get("dialogue", defaults.dialogue)),
            secondary_dialogue=str(
                data.get("secondaryDialogue", defaults.secondary_dialogue)
            ),
            saved_templates=saved,
        )
    except (KeyError, TypeError, AttributeError, ValueError, OverflowError) as e:
        raise SceneDecodeError(f"Malformed scene data: {e}") from e


def encode_scene(state: SceneState) -> bytes:
    """Serialize *state* to UTF-8 JSON."""
    return json.dumps(scene_to_dict(state), ensure_ascii=False).encode("utf-8")


def decode_scene(raw: bytes | str) -> SceneState:
    """Parse a serialized scene.

    Raises:
        SceneDecodeError: *raw* is not valid UTF-8 JSON describing a scene
    """
    try:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8-sig")
        data = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as e:
        raise SceneDecodeError(f"Invalid scene JSON: {e}") from e
    return dict_to_scene(data)


def save_project(state: SceneState, path: Path) -> None:
    """Write *state* to a project file."""
    path.write_text(
        json.dumps(scene_to_dict(state), ensure_ascii=False, indent=2), encoding="utf-8"
    )


def load_project(path: Path) -> SceneState:
    """Read a project file.

    Raises:
        OSError: the file cannot be read
        SceneDecodeError: the file is not a valid scene project
    """
    return decode_scene(path.read_bytes())
