"""Scene template data model (pure Python, no Qt dependency)."""

from __future__ import annotations

from dataclasses import dataclass, field

from src.models.style import BoxStyle, TextStyle

# Text style slots of a template, in render order.
TEXT_ROLES = ("name", "dialogue", "secondary")


@dataclass(slots=True)
class SceneTemplate:
    """A named bundle of text and box styling."""

    template_id: str
    name: str
    name_style: TextStyle = field(default_factory=TextStyle)
    dialogue_style: TextStyle = field(default_factory=TextStyle)
    secondary_dialogue_style: TextStyle = field(default_factory=TextStyle)
    box_style: BoxStyle = field(default_factory=BoxStyle)

    def copy(self) -> SceneTemplate:
        """Return a deep copy sharing no mutable state with this template."""
        return SceneTemplate(
            template_id=self.template_id,
            name=self.name,
            name_style=self.name_style.copy(),
            dialogue_style=self.dialogue_style.copy(),
            secondary_dialogue_style=self.secondary_dialogue_style.copy(),
            box_style=self.box_style.copy(),
        )

    def text_style(self, role: str) -> TextStyle:
        """Return the text style for *role* ("name", "dialogue" or "secondary")."""
        if role == "name":
            return self.name_style
        if role == "dialogue":
            return self.dialogue_style
        if role == "secondary":
            return self.secondary_dialogue_style
        raise KeyError(role)

    def to_dict(self) -> dict:
        return {
            "id": self.template_id,
            "name": self.name,
            "nameStyle": self.name_style.to_dict(),
            "dialogueStyle": self.dialogue_style.to_dict(),
            "secondaryDialogueStyle": self.secondary_dialogue_style.to_dict(),
            "boxStyle": self.box_style.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> SceneTemplate:
        return cls(
            template_id=str(data["id"]),
            name=str(data.get("name", "")),
            name_style=TextStyle.from_dict(data.get("nameStyle") or {}),
            dialogue_style=TextStyle.from_dict(data.get("dialogueStyle") or {}),
            secondary_dialogue_style=TextStyle.from_dict(
                data.get("secondaryDialogueStyle") or {}
            ),
            box_style=BoxStyle.from_dict(data.get("boxStyle") or {}),
        )
