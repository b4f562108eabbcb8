"""Main application window."""

from PySide6.QtCore import QSettings
from PySide6.QtWidgets import QMainWindow

from src.models.scene import SceneState
from src.services.autosave import AutoSaveManager
from src.services.scene_store import SceneStore
from src.ui.controllers.app_context import AppContext
from src.ui.controllers.project_controller import ProjectController
from src.ui.controllers.scene_controller import SceneController
from src.ui.main_window_menu import build_main_window_menu
from src.ui.main_window_ui import build_main_window_ui
from src.utils.config import APP_NAME, APP_VERSION


class MainWindow(QMainWindow):
    def __init__(self, settings: QSettings | None = None) -> None:
        super().__init__()
        self.setWindowTitle(f"{APP_NAME} v{APP_VERSION}")
        self.setMinimumSize(1100, 700)
        self.resize(1440, 900)

        self._settings = settings if settings is not None else QSettings()

        # Recover the last session before anything listens to the store
        self._autosave = AutoSaveManager(self._settings, self)
        self._store = SceneStore(self._autosave.restore(), self)

        build_main_window_ui(self)

        ctx = AppContext()
        ctx.store = self._store
        ctx.window = self
        ctx.autosave = self._autosave
        ctx.preview = self._preview
        self._ctx = ctx

        self._scene_ctrl = SceneController(ctx)
        self._project_ctrl = ProjectController(ctx)
        ctx.scene_ctrl = self._scene_ctrl
        ctx.project_ctrl = self._project_ctrl

        build_main_window_menu(self)
        self._connect_signals()
        self._restore_geometry()

        self._refresh(self._store.get())
        self.statusBar().showMessage("Ready")

    @property
    def store(self) -> SceneStore:
        return self._store

    # ------------------------------------------------------------------ Wiring

    def _connect_signals(self) -> None:
        scene = self._scene_ctrl
        project = self._project_ctrl

        self._store.state_changed.connect(self._refresh)
        self._autosave.attach(self._store)
        self._autosave.save_failed.connect(project.on_autosave_failed)

        self._preview.image_dropped.connect(project.set_image_from_path)
        self._media_panel.upload_requested.connect(project.on_upload_image)
        self._media_panel.clear_requested.connect(project.on_clear_image)
        self._media_panel.image_scale_changed.connect(scene.on_image_scale_changed)

        self._script_panel.text_edited.connect(scene.on_text_edited)

        for editor in self._text_editors.values():
            editor.style_edited.connect(scene.on_text_style_edited)
        self._box_editor.box_edited.connect(scene.on_box_style_edited)

        self._templates_panel.apply_requested.connect(scene.on_apply_template)
        self._templates_panel.save_requested.connect(scene.on_save_template)
        self._templates_panel.delete_requested.connect(scene.on_delete_template)
        self._templates_panel.rename_requested.connect(scene.on_rename_template)
        self._templates_panel.overwrite_requested.connect(scene.on_overwrite_template)

        self._save_btn.clicked.connect(project.on_save_project)
        self._load_btn.clicked.connect(lambda: project.on_load_project())
        self._export_btn.clicked.connect(project.on_export_png)

    def _refresh(self, state: SceneState) -> None:
        """Push *state* into every view."""
        self._preview.set_state(state)
        self._media_panel.set_state(state)
        self._script_panel.set_state(state)
        self._templates_panel.set_state(state)
        for role, editor in self._text_editors.items():
            editor.set_style(state.template.text_style(role))
        self._box_editor.set_style(state.template.box_style)

    # ----------------------------------------------------- Lifecycle

    def _restore_geometry(self) -> None:
        geometry = self._settings.value("window_geometry")
        if geometry:
            self.restoreGeometry(geometry)
        state = self._settings.value("window_state")
        if state:
            self.restoreState(state)

    def closeEvent(self, event) -> None:
        self._settings.setValue("window_geometry", self.saveGeometry())
        self._settings.setValue("window_state", self.saveState())
        self._project_ctrl.shutdown()
        # Final save before closing
        self._autosave.save(self._store.get())
        super().closeEvent(event)
