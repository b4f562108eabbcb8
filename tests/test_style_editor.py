"""Tests for live template edits."""

from __future__ import annotations

from src.models.style import BoxType, TextAlign
from src.services.project_io import default_scene
from src.services.style_editor import (
    clamp,
    update_box_style,
    update_template_name,
    update_text_style,
)


class TestClamp:
    def test_clamp(self):
        assert clamp(5, 0, 10) == 5
        assert clamp(-5, 0, 10) == 0
        assert clamp(50, 0, 10) == 10


class TestUpdateTextStyle:
    def test_updates_only_target_role(self):
        scene = default_scene()
        result = update_text_style(scene, "secondary", color="#00ff00", is_italic=False)
        assert result.template.secondary_dialogue_style.color == "#00ff00"
        assert result.template.secondary_dialogue_style.is_italic is False
        assert result.template.dialogue_style == scene.template.dialogue_style
        assert scene.template.secondary_dialogue_style.color == "#cccccc"

    def test_font_size_is_clamped(self):
        scene = default_scene()
        assert update_text_style(scene, "name", font_size=200).template.name_style.font_size == 72
        assert update_text_style(scene, "name", font_size=1).template.name_style.font_size == 12

    def test_invalid_values_are_dropped(self):
        scene = default_scene()
        assert update_text_style(scene, "name", color="pink") is scene
        assert update_text_style(scene, "name", font_family="Papyrus") is scene
        assert update_text_style(scene, "name", font_size="huge") is scene
        assert update_text_style(scene, "name", bogus=1) is scene

    def test_unknown_role_is_noop(self):
        scene = default_scene()
        assert update_text_style(scene, "narrator", font_size=30) is scene

    def test_mixed_valid_and_invalid(self):
        scene = default_scene()
        result = update_text_style(scene, "dialogue", font_family="monospace", color="nope")
        assert result.template.dialogue_style.font_family == "monospace"
        assert result.template.dialogue_style.color == "#ffffff"


class TestUpdateBoxStyle:
    def test_type_and_alignment_from_strings(self):
        result = update_box_style(default_scene(), type="fantasy", text_align="right")
        assert result.template.box_style.type == BoxType.FANTASY
        assert result.template.box_style.text_align == TextAlign.RIGHT

    def test_ranges_are_clamped(self):
        result = update_box_style(default_scene(), opacity=150, padding=-3)
        assert result.template.box_style.opacity == 100
        assert result.template.box_style.padding == 0

    def test_padding_upper_bound(self):
        result = update_box_style(default_scene(), padding=99)
        assert result.template.box_style.padding == 50

    def test_unknown_type_is_noop(self):
        scene = default_scene()
        assert update_box_style(scene, type="octagon") is scene

    def test_edit_does_not_touch_saved_templates(self):
        from src.services.template_registry import save_as_template

        scene = save_as_template(default_scene(), "Saved")
        result = update_box_style(scene, background_color="#123456")
        assert result.template.box_style.background_color == "#123456"
        assert result.saved_templates[0].box_style.background_color == "#000000"


class TestUpdateTemplateName:
    def test_rename_live(self):
        result = update_template_name(default_scene(), "Draft")
        assert result.template.name == "Draft"

    def test_blank_is_noop(self):
        scene = default_scene()
        assert update_template_name(scene, " ") is scene
