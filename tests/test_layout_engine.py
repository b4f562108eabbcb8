"""Tests for render plan resolution and box geometry (no Qt)."""

from __future__ import annotations

import pytest

from src.models.style import BoxType, TextAlign
from src.services.layout_engine import (
    PANEL_DECORATIONS,
    GradientBox,
    PanelBox,
    Rgba,
    hex_to_rgba,
    layout_box,
    resolve_render_plan,
)
from src.services.project_io import default_scene
from src.services.style_editor import update_box_style
from src.services.template_registry import apply_template
from src.utils.config import CONTENT_SIDE_PADDING, PANEL_INNER_PADDING, PANEL_SIDE_MARGIN


class TestHexToRgba:
    def test_black_at_80(self):
        assert hex_to_rgba("#000000", 80).css() == "rgba(0, 0, 0, 0.8)"

    def test_channels(self):
        assert hex_to_rgba("#b8860b", 50) == Rgba(184, 134, 11, 0.5)

    def test_opacity_is_clamped(self):
        assert hex_to_rgba("#ffffff", 150).a == 1.0
        assert hex_to_rgba("#ffffff", -20).a == 0.0

    def test_bad_channel_becomes_zero(self):
        assert hex_to_rgba("#zz8000", 100) == Rgba(0, 128, 0, 1.0)

    @pytest.mark.parametrize("color", ["#-10000", "#+f+f+f", "# f f f"])
    def test_signed_or_spaced_channel_becomes_zero(self, color):
        assert hex_to_rgba(color, 100) == Rgba(0, 0, 0, 1.0)

    def test_alpha_byte(self):
        assert Rgba(0, 0, 0, 1.0).alpha_byte() == 255
        assert Rgba(0, 0, 0, 0.0).alpha_byte() == 0


class TestResolveRenderPlan:
    def test_default_scene_lines(self):
        plan = resolve_render_plan(default_scene())
        assert [line.role for line in plan.lines] == ["name", "dialogue", "secondary"]
        assert plan.lines[1].font_size_px == 32
        assert plan.lines[2].italic is True
        assert isinstance(plan.box, GradientBox)
        assert plan.box.paint.css() == "rgba(0, 0, 0, 0.8)"

    def test_only_dialogue(self):
        scene = default_scene()
        scene.character_name = ""
        scene.secondary_dialogue = ""
        scene.dialogue = "Hello"
        plan = resolve_render_plan(scene)
        assert len(plan.lines) == 1
        assert plan.lines[0].text == "Hello"
        assert plan.lines[0].role == "dialogue"

    def test_whitespace_only_text_is_suppressed(self):
        scene = default_scene()
        scene.character_name = "   "
        scene.secondary_dialogue = "\n\t"
        plan = resolve_render_plan(scene)
        assert [line.role for line in plan.lines] == ["dialogue"]

    def test_all_empty_still_has_box(self):
        scene = default_scene()
        scene.character_name = scene.dialogue = scene.secondary_dialogue = ""
        plan = resolve_render_plan(scene)
        assert plan.lines == ()
        assert isinstance(plan.box, GradientBox)

    def test_font_size_passes_through_unclamped(self):
        scene = default_scene()
        scene.template.dialogue_style.font_size = 200
        plan = resolve_render_plan(scene)
        assert plan.lines[1].font_size_px == 200

    @pytest.mark.parametrize("template_id,kind", [("fantasy", BoxType.FANTASY), ("romance", BoxType.ROMANCE)])
    def test_panel_variants(self, template_id, kind):
        plan = resolve_render_plan(apply_template(default_scene(), template_id))
        assert isinstance(plan.box, PanelBox)
        assert plan.box.kind == kind
        assert plan.box.decoration == PANEL_DECORATIONS[kind]

    def test_romance_alignment(self):
        plan = resolve_render_plan(apply_template(default_scene(), "romance"))
        assert plan.text_align == TextAlign.CENTER

    def test_solid_box(self):
        plan = resolve_render_plan(update_box_style(default_scene(), type="solid"))
        assert isinstance(plan.box, PanelBox)
        assert plan.box.decoration.corner_radius == 8
        assert plan.box.decoration.border_width == 0

    def test_fantasy_decoration(self):
        deco = PANEL_DECORATIONS[BoxType.FANTASY]
        assert deco.border_width == 4
        assert deco.border_color == "#b8860b"
        assert deco.glow_radius == 15
        assert deco.glow_color.css() == "rgba(184, 134, 11, 0.5)"

    def test_romance_decoration(self):
        deco = PANEL_DECORATIONS[BoxType.ROMANCE]
        assert deco.border_width == 2
        assert deco.border_color == "#ffb6c1"
        assert deco.corner_radius == 24


class TestLayoutBox:
    def test_gradient_fade_span(self):
        box = resolve_render_plan(default_scene()).box
        # padding 20% + 10% fade margin of a 720px canvas
        assert box.fade_span(720) == pytest.approx(216)
        geometry = layout_box(box, 1280, 720, 0)
        assert geometry.box.height == pytest.approx(216)
        assert geometry.box.bottom == pytest.approx(720)

    def test_gradient_grows_with_text(self):
        box = resolve_render_plan(default_scene()).box
        geometry = layout_box(box, 1280, 720, 100)
        assert geometry.text.bottom == pytest.approx(720 - 144)
        assert geometry.text.y == pytest.approx(720 - 144 - 100)
        assert geometry.box.y == pytest.approx(720 - 144 - 100 - 72)
        assert geometry.box.width == 1280
        assert geometry.text.x == CONTENT_SIDE_PADDING
        assert geometry.text.width == 1280 - 2 * CONTENT_SIDE_PADDING

    def test_gradient_top_never_negative(self):
        box = resolve_render_plan(default_scene()).box
        geometry = layout_box(box, 1280, 720, 5000)
        assert geometry.box.y == 0

    def test_panel_geometry(self):
        box = resolve_render_plan(apply_template(default_scene(), "fantasy")).box
        geometry = layout_box(box, 1280, 720, 100)
        assert geometry.box.x == PANEL_SIDE_MARGIN
        assert geometry.box.width == 1280 - 2 * PANEL_SIDE_MARGIN
        assert geometry.box.height == 100 + 2 * PANEL_INNER_PADDING
        # padding 15% of 720
        assert geometry.box.bottom == pytest.approx(720 - 108)
        assert geometry.text.x == PANEL_SIDE_MARGIN + PANEL_INNER_PADDING
        assert geometry.text.y == pytest.approx(geometry.box.y + PANEL_INNER_PADDING)
