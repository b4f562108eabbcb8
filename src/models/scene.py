"""Scene state model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from src.models.template import SceneTemplate


class ImageScale(str, Enum):
    FIT = "fit"
    ORIGINAL = "original"


@dataclass(slots=True)
class SceneState:
    """Everything needed to draw one scene.

    ``template`` is the live template, held by value: editing it never
    touches the built-in catalog or ``saved_templates``.
    """

    template: SceneTemplate
    image: str | None = None  # data URI
    image_scale: ImageScale = ImageScale.FIT
    character_name: str = ""
    dialogue: str = ""
    secondary_dialogue: str = ""
    saved_templates: list[SceneTemplate] = field(default_factory=list)

    @property
    def has_image(self) -> bool:
        return bool(self.image)

    def saved_template_ids(self) -> list[str]:
        return [t.template_id for t in self.saved_templates]

    def copy(self) -> SceneState:
        """Return a deep copy."""
        return SceneState(
            template=self.template.copy(),
            image=self.image,
            image_scale=self.image_scale,
            character_name=self.character_name,
            dialogue=self.dialogue,
            secondary_dialogue=self.secondary_dialogue,
            saved_templates=[t.copy() for t in self.saved_templates],
        )
