"""Controller tests with a real SceneStore and a mocked window."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from PySide6.QtCore import QSettings
from PySide6.QtGui import QColor, QImage

from src.models.scene import ImageScale
from src.models.style import BoxType
from src.services.autosave import AutoSaveManager
from src.services.project_io import default_scene, save_project
from src.services.scene_store import SceneStore
from src.services.template_registry import apply_template
from src.ui.controllers import project_controller as project_module
from src.ui.controllers.app_context import AppContext
from src.ui.controllers.project_controller import ProjectController
from src.ui.controllers.scene_controller import SceneController


@pytest.fixture
def ctx(qapp, tmp_path):
    ctx = AppContext()
    ctx.store = SceneStore()
    ctx.window = MagicMock()
    ctx.autosave = AutoSaveManager(
        QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)
    )
    return ctx


@pytest.fixture
def message_box(monkeypatch):
    box = MagicMock()
    monkeypatch.setattr(project_module, "QMessageBox", box)
    return box


class TestAppContext:
    def test_init_defaults(self) -> None:
        ctx = AppContext()
        assert ctx.store is None
        assert ctx.current_project_path is None
        assert ctx.recent_menu is None

    def test_status_bar_returns_window_statusBar(self) -> None:
        ctx = AppContext()
        mock_bar = MagicMock()
        ctx.window = MagicMock()
        ctx.window.statusBar.return_value = mock_bar
        assert ctx.status_bar() is mock_bar
        ctx.window.statusBar.assert_called_once()


class TestSceneController:
    def test_text_edit(self, ctx):
        SceneController(ctx).on_text_edited("dialogue", "New line")
        assert ctx.store.get().dialogue == "New line"

    def test_unknown_text_field_ignored(self, ctx):
        before = ctx.store.get()
        SceneController(ctx).on_text_edited("template", "x")
        assert ctx.store.get() is before

    def test_image_scale(self, ctx):
        ctrl = SceneController(ctx)
        ctrl.on_image_scale_changed("original")
        assert ctx.store.get().image_scale == ImageScale.ORIGINAL
        ctrl.on_image_scale_changed("bogus")
        assert ctx.store.get().image_scale == ImageScale.ORIGINAL

    def test_style_edits(self, ctx):
        ctrl = SceneController(ctx)
        ctrl.on_text_style_edited("name", {"font_size": 40})
        ctrl.on_box_style_edited({"type": "solid"})
        state = ctx.store.get()
        assert state.template.name_style.font_size == 40
        assert state.template.box_style.type == BoxType.SOLID

    def test_invalid_edit_does_not_emit(self, ctx, qtbot):
        with qtbot.assertNotEmitted(ctx.store.state_changed):
            SceneController(ctx).on_box_style_edited({"opacity": "lots"})

    def test_template_lifecycle(self, ctx):
        ctrl = SceneController(ctx)
        ctrl.on_apply_template("fantasy")
        ctrl.on_save_template("Gold")
        template_id = ctx.store.get().saved_templates[0].template_id
        ctrl.on_rename_template(template_id, "Golden")
        ctrl.on_apply_template("romance")
        ctrl.on_overwrite_template(template_id)
        saved = ctx.store.get().saved_templates[0]
        assert saved.name == "Golden"
        assert saved.box_style.type == BoxType.ROMANCE
        ctrl.on_delete_template(template_id)
        assert ctx.store.get().saved_templates == []

    def test_blank_template_name_saves_nothing(self, ctx, qtbot):
        with qtbot.assertNotEmitted(ctx.store.state_changed):
            SceneController(ctx).on_save_template("   ")
        assert ctx.store.get().saved_templates == []
        ctx.window.statusBar.return_value.showMessage.assert_not_called()

    def test_saved_template_reports_status(self, ctx):
        SceneController(ctx).on_save_template(" Gold ")
        ctx.window.statusBar.return_value.showMessage.assert_called_once_with(
            "Template saved: Gold", 3000
        )


class TestProjectController:
    def test_load_project(self, ctx, tmp_path, message_box):
        path = tmp_path / "scene.json"
        state = apply_template(default_scene(), "romance")
        save_project(state, path)
        ProjectController(ctx).on_load_project(path)
        assert ctx.store.get() == state
        assert ctx.current_project_path == path
        assert ctx.autosave.get_recent_files() == [path]
        message_box.critical.assert_not_called()

    def test_load_malformed_keeps_state(self, ctx, tmp_path, message_box):
        path = tmp_path / "bad.json"
        path.write_text("{oops", encoding="utf-8")
        before = ctx.store.get()
        ProjectController(ctx).on_load_project(path)
        assert ctx.store.get() is before
        assert ctx.current_project_path is None
        message_box.critical.assert_called_once()

    def test_set_image_from_path(self, ctx, tmp_path, message_box):
        image = QImage(8, 8, QImage.Format.Format_RGB32)
        image.fill(QColor("#00ff00"))
        path = tmp_path / "green.png"
        image.save(str(path), "PNG")
        ctrl = ProjectController(ctx)
        ctrl.set_image_from_path(str(path))
        assert ctx.store.get().image.startswith("data:image/png;base64,")
        ctrl.on_clear_image()
        assert ctx.store.get().image is None

    def test_set_image_rejects_non_image(self, ctx, tmp_path, message_box):
        path = tmp_path / "notes.txt"
        path.write_text("x")
        before = ctx.store.get()
        ProjectController(ctx).set_image_from_path(str(path))
        assert ctx.store.get() is before
        message_box.warning.assert_called_once()

    def test_export_in_thread(self, ctx, tmp_path, qtbot, message_box):
        ctrl = ProjectController(ctx)
        out = tmp_path / "export.png"
        ctrl.start_export(out, scale=1)
        assert ctrl.is_exporting
        qtbot.waitUntil(lambda: not ctrl.is_exporting, timeout=20000)
        assert out.is_file()
        message_box.critical.assert_not_called()

    def test_cleanup_keeps_thread_that_did_not_stop(self, ctx):
        ctrl = ProjectController(ctx)
        thread = MagicMock()
        thread.isRunning.return_value = True
        thread.wait.return_value = False
        ctrl._thread = thread
        ctrl._worker = MagicMock()
        ctrl._cleanup_thread()
        assert ctrl._thread is thread
        assert ctrl.is_exporting

    def test_shutdown_waits_without_timeout(self, ctx):
        ctrl = ProjectController(ctx)
        thread = MagicMock()
        thread.isRunning.side_effect = [True, False]
        thread.wait.return_value = True
        ctrl._thread = thread
        ctrl._worker = MagicMock()
        ctrl.shutdown()
        thread.wait.assert_called_once_with()
        assert ctrl._thread is None
        assert not ctrl.is_exporting
