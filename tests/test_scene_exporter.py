"""Tests for scene painting and PNG export."""

from __future__ import annotations

import pytest
from PySide6.QtCore import QThread
from PySide6.QtGui import QColor, QImage

from src.models.scene import ImageScale
from src.services.image_loader import load_image_data_uri
from src.services.project_io import default_scene
from src.services.scene_exporter import ExportError, export_png, render_scene
from src.services.scene_painter import canvas_size
from src.services.template_registry import apply_template
from src.workers.export_worker import ExportWorker


@pytest.fixture
def big_image_uri(tmp_path, qapp):
    image = QImage(1000, 900, QImage.Format.Format_RGB32)
    image.fill(QColor("#3366cc"))
    path = tmp_path / "big.png"
    image.save(str(path), "PNG")
    return load_image_data_uri(path)


class TestCanvasSize:
    def test_fit_is_fixed(self, qapp):
        assert canvas_size(default_scene()).width() == 1280
        assert canvas_size(default_scene()).height() == 720

    def test_original_uses_image_size_with_minimum(self, qapp):
        scene = default_scene()
        scene.image_scale = ImageScale.ORIGINAL
        small = QImage(200, 100, QImage.Format.Format_RGB32)
        large = QImage(1000, 900, QImage.Format.Format_RGB32)
        assert (canvas_size(scene, small).width(), canvas_size(scene, small).height()) == (800, 600)
        assert (canvas_size(scene, large).width(), canvas_size(scene, large).height()) == (1000, 900)

    def test_original_without_image_falls_back(self, qapp):
        scene = default_scene()
        scene.image_scale = ImageScale.ORIGINAL
        assert canvas_size(scene, QImage()).width() == 1280


class TestRenderScene:
    def test_double_scale_on_black(self, qapp):
        image = render_scene(default_scene())
        assert (image.width(), image.height()) == (2560, 1440)
        top_left = image.pixelColor(0, 0)
        assert (top_left.red(), top_left.green(), top_left.blue()) == (0, 0, 0)

    def test_background_fills_canvas_in_fit_mode(self, qapp, big_image_uri):
        scene = default_scene()
        scene.image = big_image_uri
        image = render_scene(scene, scale=1)
        center_top = image.pixelColor(640, 5)
        assert center_top.name() == "#3366cc"

    def test_original_mode_size(self, qapp, big_image_uri):
        scene = default_scene()
        scene.image = big_image_uri
        scene.image_scale = ImageScale.ORIGINAL
        image = render_scene(scene, scale=1)
        assert (image.width(), image.height()) == (1000, 900)

    @pytest.mark.parametrize("template_id", ["cinematic", "fantasy", "romance"])
    def test_renders_every_builtin(self, qapp, template_id):
        image = render_scene(apply_template(default_scene(), template_id), scale=1)
        assert not image.isNull()

    def test_romance_box_is_light(self, qapp):
        image = render_scene(apply_template(default_scene(), "romance"), scale=1)
        # Bottom padding of the white panel, below the text block
        pixel = image.pixelColor(640, 720 - 72 - 4)
        assert pixel.red() > 200 and pixel.green() > 200 and pixel.blue() > 200


class TestExportPng:
    def test_writes_png(self, qapp, tmp_path):
        out = export_png(default_scene(), tmp_path / "out.png")
        assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"
        loaded = QImage(str(out))
        assert (loaded.width(), loaded.height()) == (2560, 1440)

    def test_unwritable_path_raises(self, qapp, tmp_path):
        with pytest.raises(ExportError):
            export_png(default_scene(), tmp_path / "missing_dir" / "out.png")


class TestExportWorker:
    def test_run_emits_finished(self, qapp, qtbot, tmp_path):
        out = tmp_path / "worker.png"
        worker = ExportWorker(default_scene(), out, scale=1)
        with qtbot.waitSignal(worker.finished) as blocker:
            worker.run()
        assert blocker.args == [str(out)]
        assert out.is_file()

    def test_run_emits_error(self, qapp, qtbot, tmp_path):
        worker = ExportWorker(default_scene(), tmp_path / "nope" / "x.png", scale=1)
        with qtbot.waitSignal(worker.error):
            worker.run()

    def test_threaded_export(self, qapp, qtbot, tmp_path):
        out = tmp_path / "threaded.png"
        thread = QThread()
        worker = ExportWorker(default_scene(), out, scale=1)
        worker.moveToThread(thread)
        thread.started.connect(worker.run)
        with qtbot.waitSignal(worker.finished, timeout=20000):
            thread.start()
        thread.quit()
        thread.wait(5000)
        assert out.is_file()
