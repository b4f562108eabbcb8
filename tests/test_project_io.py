"""Tests for scene JSON encoding and project save/load."""

from __future__ import annotations

import json

import pytest

from src.models.scene import ImageScale
from src.services.project_io import (
    DEFAULT_CHARACTER_NAME,
    DEFAULT_DIALOGUE,
    DEFAULT_SECONDARY_DIALOGUE,
    SceneDecodeError,
    decode_scene,
    default_scene,
    dict_to_scene,
    encode_scene,
    load_project,
    save_project,
    scene_to_dict,
)
from src.services.style_editor import update_box_style
from src.services.template_registry import apply_template, is_builtin_id, save_as_template


@pytest.fixture
def sample_scene():
    scene = apply_template(default_scene(), "fantasy")
    scene = update_box_style(scene, opacity=55)
    scene = save_as_template(scene, "Gold")
    scene.character_name = "アリス"
    scene.dialogue = "Line one\nLine two"
    scene.image = "data:image/png;base64,iVBORw0KGgo="
    scene.image_scale = ImageScale.ORIGINAL
    return scene


class TestDefaultScene:
    def test_default_text(self):
        scene = default_scene()
        assert scene.character_name == DEFAULT_CHARACTER_NAME
        assert scene.dialogue == DEFAULT_DIALOGUE
        assert scene.secondary_dialogue == DEFAULT_SECONDARY_DIALOGUE
        assert scene.template.template_id == "cinematic"
        assert scene.image is None
        assert scene.saved_templates == []

    def test_each_call_is_fresh(self):
        a = default_scene()
        a.template.name_style.font_size = 70
        assert default_scene().template.name_style.font_size == 24


class TestEncodeDecode:
    def test_roundtrip(self, sample_scene):
        assert decode_scene(encode_scene(sample_scene)) == sample_scene

    def test_keys_are_camel_case(self, sample_scene):
        data = json.loads(encode_scene(sample_scene))
        assert set(data) == {
            "image", "imageScale", "characterName", "dialogue",
            "secondaryDialogue", "template", "savedTemplates",
        }
        assert data["imageScale"] == "original"
        assert data["template"]["boxStyle"]["type"] == "fantasy"

    def test_non_ascii_kept_verbatim(self, sample_scene):
        assert "アリス".encode("utf-8") in encode_scene(sample_scene)

    def test_decode_accepts_str_and_bom(self, sample_scene):
        text = encode_scene(sample_scene).decode("utf-8")
        assert decode_scene(text) == sample_scene
        assert decode_scene(b"\xef\xbb\xbf" + text.encode("utf-8")) == sample_scene

    @pytest.mark.parametrize("raw", [b"", b"{not json", b"\xff\xfe\x00", b"[1, 2]", b"42"])
    def test_malformed_raises(self, raw):
        with pytest.raises(SceneDecodeError):
            decode_scene(raw)

    def test_deep_nesting_raises_decode_error(self):
        with pytest.raises(SceneDecodeError):
            decode_scene(b"[" * 100000)

    @pytest.mark.parametrize("number", ["1e400", "Infinity", "-Infinity", "NaN"])
    def test_non_finite_numbers_use_defaults(self, number):
        raw = (
            '{"template": {"id": "x", "nameStyle": {"fontSize": %s},'
            ' "boxStyle": {"opacity": %s, "padding": %s}}}' % (number, number, number)
        )
        scene = decode_scene(raw)
        assert scene.template.name_style.font_size == 24
        assert scene.template.box_style.opacity == 80
        assert scene.template.box_style.padding == 20

    def test_template_without_id_raises(self):
        with pytest.raises(SceneDecodeError):
            decode_scene(json.dumps({"template": {"name": "x"}}))

    def test_missing_fields_use_defaults(self):
        scene = dict_to_scene({})
        assert scene == default_scene()

    def test_field_coercion(self):
        scene = dict_to_scene({
            "imageScale": "stretch",
            "image": "",
            "template": {"id": "t", "name": "T", "boxStyle": {"type": "weird", "opacity": 55}},
        })
        assert scene.image_scale == ImageScale.FIT
        assert scene.image is None
        assert scene.template.box_style.opacity == 55
        assert scene.template.box_style.type.value == "gradient"

    def test_duplicate_saved_ids_keep_first(self):
        data = scene_to_dict(default_scene())
        data["savedTemplates"] = [
            {"id": "custom-a", "name": "First"},
            {"id": "custom-a", "name": "Second"},
        ]
        scene = dict_to_scene(data)
        assert [t.name for t in scene.saved_templates] == ["First"]

    def test_saved_templates_with_builtin_ids_are_dropped(self):
        raw = json.dumps({"savedTemplates": [
            {"id": "cinematic", "name": "Impostor"},
            {"id": "custom-b", "name": "Mine"},
            {"id": "romance", "name": "Another"},
        ]})
        scene = decode_scene(raw)
        assert scene.saved_template_ids() == ["custom-b"]
        assert not any(is_builtin_id(i) for i in scene.saved_template_ids())


class TestProjectFile:
    def test_save_and_load(self, sample_scene, tmp_path):
        path = tmp_path / "scene.json"
        save_project(sample_scene, path)
        assert load_project(path) == sample_scene

    def test_file_is_indented_utf8(self, sample_scene, tmp_path):
        path = tmp_path / "scene.json"
        save_project(sample_scene, path)
        text = path.read_text(encoding="utf-8")
        assert "\n  " in text
        assert "アリス" in text

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            load_project(tmp_path / "missing.json")

    def test_load_malformed_file(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("not a scene", encoding="utf-8")
        with pytest.raises(SceneDecodeError):
            load_project(path)
